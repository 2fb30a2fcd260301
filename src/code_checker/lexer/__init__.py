"""Lexer adapter for the inspected source language (PHP)."""

from code_checker.lexer.php import PHP_EXTENSIONS, Token, TokenKind, tokenize, untokenize

__all__ = ["PHP_EXTENSIONS", "Token", "TokenKind", "tokenize", "untokenize"]
