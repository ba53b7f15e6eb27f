import unittest

from graphcalc.lexer import (
    EQUALS,
    FUNCTION,
    LPAREN,
    NUMBER,
    OPERATOR,
    RPAREN,
    VARIABLE,
    parse_number,
    tokenize,
)


def kinds(expr):
    return [token.kind for token in tokenize(expr)]


class TestTokenize(unittest.TestCase):
    def test_numbers_keep_their_value(self):
        for literal in ("0", "7", "3.25", "0.001", "123456.5", ".5", "5."):
            tokens = tokenize(literal)
            self.assertEqual(len(tokens), 1)
            self.assertEqual(tokens[0].kind, NUMBER)
            self.assertEqual(tokens[0].value, float(literal))

    def test_malformed_number_takes_longest_prefix(self):
        self.assertEqual(tokenize("1.2.3")[0].value, 1.2)
        self.assertEqual(tokenize(".")[0].value, 0.0)
        self.assertEqual(tokenize("..5")[0].value, 0.0)

    def test_functions_and_variables(self):
        self.assertEqual(kinds("sin(x)"), [FUNCTION, LPAREN, VARIABLE, RPAREN])
        for name in ("sin", "cos", "tan", "log", "ln", "exp"):
            self.assertEqual(tokenize(name)[0].kind, FUNCTION)

    def test_function_names_are_case_sensitive(self):
        self.assertEqual(tokenize("Sin")[0].kind, VARIABLE)

    def test_letter_runs_are_maximal(self):
        tokens = tokenize("sinx")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].kind, VARIABLE)
        self.assertEqual(tokens[0].text, "sinx")

    def test_letters_then_digits_split(self):
        tokens = tokenize("log10")
        self.assertEqual([t.kind for t in tokens], [FUNCTION, NUMBER])
        self.assertEqual(tokens[1].value, 10.0)

    def test_any_name_is_a_variable(self):
        tokens = tokenize("foo")
        self.assertEqual(tokens[0].kind, VARIABLE)
        self.assertEqual(tokens[0].text, "foo")

    def test_operators_parens_equals(self):
        self.assertEqual(kinds("+-*/^"), [OPERATOR] * 5)
        self.assertEqual([t.text for t in tokenize("+-*/^")], list("+-*/^"))
        self.assertEqual(kinds("x=y"), [VARIABLE, EQUALS, VARIABLE])

    def test_unknown_characters_are_dropped(self):
        self.assertEqual(kinds("x # y @ $"), [VARIABLE, VARIABLE])
        self.assertEqual(tokenize("%&!"), ())

    def test_whitespace_only(self):
        self.assertEqual(tokenize("   \t "), ())
        self.assertEqual(tokenize(""), ())

    def test_implicit_product_is_two_tokens(self):
        self.assertEqual(kinds("2x"), [NUMBER, VARIABLE])

    def test_long_input_has_no_cap(self):
        self.assertEqual(len(tokenize("x+" * 500 + "1")), 1001)


class TestParseNumber(unittest.TestCase):
    def test_prefixes(self):
        self.assertEqual(parse_number("42"), 42.0)
        self.assertEqual(parse_number("4.2.1"), 4.2)
        self.assertEqual(parse_number(""), 0.0)


if __name__ == "__main__":
    unittest.main()
