"""Unit tests for the formula tokenizer."""

import pytest
from branchreport.formula.tokens import Token, TokenKind, tokenize


class TestTokenize:
    """Tests for tokenize."""

    def test_empty_formula(self):
        """Test that empty input gives no tokens."""
        assert tokenize("") == []

    def test_none_formula(self):
        """Test that None gives no tokens."""
        assert tokenize(None) == []

    def test_simple_expression(self):
        """Test tokenizing a subtraction of two keys."""
        assert tokenize("A - B") == [
            Token(TokenKind.VARIABLE, "A"),
            Token(TokenKind.OPERATOR, "-"),
            Token(TokenKind.VARIABLE, "B"),
        ]

    def test_parentheses(self):
        """Test that parentheses get their own kinds."""
        kinds = [t.kind for t in tokenize("(A - B) / A")]
        assert kinds == [
            TokenKind.LEFT_PAREN,
            TokenKind.VARIABLE,
            TokenKind.OPERATOR,
            TokenKind.VARIABLE,
            TokenKind.RIGHT_PAREN,
            TokenKind.OPERATOR,
            TokenKind.VARIABLE,
        ]

    @pytest.mark.parametrize("text", ["42", "3.14", "7."])
    def test_numbers(self, text):
        """Test numeric literals."""
        assert tokenize(text) == [Token(TokenKind.NUMBER, text)]

    def test_whitespace_not_required(self):
        """Test that tokens are found without separating spaces."""
        texts = [t.text for t in tokenize("A*2+total_sales/B1")]
        assert texts == ["A", "*", "2", "+", "total_sales", "/", "B1"]

    def test_identifiers_keep_case(self):
        """Test that identifiers are not case-folded."""
        assert [t.text for t in tokenize("Revenue + revenue")] == ["Revenue", "+", "revenue"]

    def test_unknown_characters_skipped(self):
        """Test that unsupported characters are ignored."""
        texts = [t.text for t in tokenize("A % B ^ $")]
        assert texts == ["A", "B"]

    def test_unparseable_input(self):
        """Test that input with nothing recognizable gives no tokens."""
        assert tokenize("  %%% ,, ") == []

    def test_number_before_identifier(self):
        """Test that a leading digit run is read as a number."""
        assert tokenize("2x") == [
            Token(TokenKind.NUMBER, "2"),
            Token(TokenKind.VARIABLE, "x"),
        ]

    def test_tokens_are_frozen(self):
        """Test that tokens cannot be mutated."""
        token = tokenize("A")[0]
        with pytest.raises(AttributeError):
            token.text = "B"

    def test_fresh_list_per_call(self):
        """Test that repeated calls do not share results."""
        first = tokenize("A + B")
        first.clear()
        assert len(tokenize("A + B")) == 3
