# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the WGSL struct lexer/tokenizer.
#
# Test coverage includes:
#   - Keyword recognition, including vec/mat shorthand names
#   - Whole-word keyword matching (keywords vs. longer identifiers)
#   - Decimal integer literals with i/u suffixes
#   - Punctuators and the Unknown catch-all
#   - Comment and whitespace skipping
#   - Token position tracking
# =============================================================================

import pytest
from wgsl_struct.lexer import WGSLLexer, tokenize
from wgsl_struct.tokens import Token, TokenKind
from wgsl_struct.errors import LexError


def kinds_and_texts(source: str) -> list[tuple[TokenKind, str]]:
    """Tokenize and reduce each token to (kind, text) for compact assertions."""
    return [(t.kind, t.text) for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source should produce no tokens."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Whitespace-only source should produce no tokens."""
        assert tokenize("   \n\t  \r\n  ") == []

    def test_comment_only(self):
        """Comments are recognised but never emitted."""
        assert tokenize("// just a comment") == []

    def test_comment_skipped(self):
        """Comment text runs to end of line only."""
        assert kinds_and_texts("// comment\nfoo") == [(TokenKind.IDENTIFIER, "foo")]

    def test_identifiers(self):
        """Identifiers should be tokenized correctly."""
        for ident in ["a", "Uniforms", "_bar", "test123", "_123_abc"]:
            assert kinds_and_texts(ident) == [(TokenKind.IDENTIFIER, ident)]

    def test_punctuators(self):
        """Every punctuator is its own token."""
        tokens = kinds_and_texts(": , { } @ ( ) > <")
        assert [k for k, _ in tokens] == [TokenKind.PUNCTUATOR] * 9
        assert [t for _, t in tokens] == [":", ",", "{", "}", "@", "(", ")", ">", "<"]

    def test_unknown_character(self):
        """Characters outside the catalog become Unknown tokens."""
        assert kinds_and_texts("a ; b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.UNKNOWN, ";"),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_unknown_is_single_character(self):
        """Unknown consumes exactly one character at a time."""
        assert kinds_and_texts("#$") == [
            (TokenKind.UNKNOWN, "#"),
            (TokenKind.UNKNOWN, "$"),
        ]


# =============================================================================
# Keyword Tests
# =============================================================================

class TestKeywords:
    """Test keyword recognition and priority over identifiers."""

    @pytest.mark.parametrize("word", [
        "struct", "size", "align", "array",
        "bool", "i32", "u32", "f32", "f16",
    ])
    def test_plain_keywords(self, word):
        assert kinds_and_texts(word) == [(TokenKind.KEYWORD, word)]

    @pytest.mark.parametrize("word", [
        "vec2", "vec3", "vec4", "vec2i", "vec3u", "vec4f", "vec3h",
        "mat2x2", "mat3x4", "mat4x3f", "mat2x2h",
    ])
    def test_vector_and_matrix_keywords(self, word):
        assert kinds_and_texts(word) == [(TokenKind.KEYWORD, word)]

    @pytest.mark.parametrize("word", [
        "structure", "sizes", "aligned", "arrays", "bool2",
        "vec5", "vec3b", "mat2x2i", "mat5x2", "f32x",
    ])
    def test_keyword_prefix_is_identifier(self, word):
        """Keywords only match as whole words."""
        assert kinds_and_texts(word) == [(TokenKind.IDENTIFIER, word)]

    def test_keyword_followed_by_punctuator(self):
        assert kinds_and_texts("vec3<f32>") == [
            (TokenKind.KEYWORD, "vec3"),
            (TokenKind.PUNCTUATOR, "<"),
            (TokenKind.KEYWORD, "f32"),
            (TokenKind.PUNCTUATOR, ">"),
        ]


# =============================================================================
# Number Tests
# =============================================================================

class TestDecimalInt:
    """Test decimal integer literal tokenization."""

    @pytest.mark.parametrize("text", ["0", "1", "16", "256", "0u", "0i", "4u", "12i"])
    def test_decimal_ints(self, text):
        assert kinds_and_texts(text) == [(TokenKind.DECIMAL_INT, text)]

    def test_leading_zero_splits(self):
        """Multi-digit values may not start with zero."""
        assert kinds_and_texts("07") == [
            (TokenKind.DECIMAL_INT, "0"),
            (TokenKind.DECIMAL_INT, "7"),
        ]

    def test_negative_sign_is_unknown(self):
        assert kinds_and_texts("-4") == [
            (TokenKind.UNKNOWN, "-"),
            (TokenKind.DECIMAL_INT, "4"),
        ]


# =============================================================================
# Full Declaration and Position Tests
# =============================================================================

class TestDeclarations:
    """Test tokenizing complete declarations."""

    def test_attributed_member(self):
        assert kinds_and_texts("@align(16) a: vec3f,") == [
            (TokenKind.PUNCTUATOR, "@"),
            (TokenKind.KEYWORD, "align"),
            (TokenKind.PUNCTUATOR, "("),
            (TokenKind.DECIMAL_INT, "16"),
            (TokenKind.PUNCTUATOR, ")"),
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.PUNCTUATOR, ":"),
            (TokenKind.KEYWORD, "vec3f"),
            (TokenKind.PUNCTUATOR, ","),
        ]

    def test_token_positions(self):
        """Tokens record offset, line and column."""
        tokens = tokenize("struct A {\n  x: f32\n}", "shader.wgsl")
        x = tokens[3]
        assert x.text == "x"
        assert (x.line, x.column, x.offset) == (2, 3, 13)
        assert x.filename == "shader.wgsl"
        assert str(x.location) == "shader.wgsl:2:3"

    def test_lexer_is_iterator(self):
        lexer = WGSLLexer("a b", "<test>")
        tokens = list(lexer.tokenize())
        assert [t.text for t in tokens] == ["a", "b"]

    def test_token_matches(self):
        token = Token(TokenKind.PUNCTUATOR, ",")
        assert token.matches()
        assert token.matches(TokenKind.PUNCTUATOR)
        assert token.matches((TokenKind.KEYWORD, TokenKind.PUNCTUATOR), ",")
        assert token.matches(value=[",", "}"])
        assert not token.matches(TokenKind.IDENTIFIER)
        assert not token.matches(TokenKind.PUNCTUATOR, "}")


class TestLexError:
    """LexError carries the failing offset and the remaining text."""

    def test_attributes(self):
        error = LexError(3, "rest")
        assert error.offset == 3
        assert error.remaining == "rest"
        assert "offset 3" in str(error)
