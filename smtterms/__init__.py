"""Hash-consed SMT terms with linear arithmetic normalization, rewriting and a parser context."""

__version__ = "0.1.0"