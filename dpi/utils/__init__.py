"""Text processing primitives: tokenizer, phonetics, patterns and TF-IDF."""
