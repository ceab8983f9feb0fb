"""Shell tokenizer, parser and variable expander, a buffered line reader and a pipex runner."""

__version__ = "0.1.0"
__all__ = ["tokens", "parser", "expander", "linereader", "pipex"]