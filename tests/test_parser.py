import unittest

from chemcalc.errors import ChemError, ErrorKind
from chemcalc.models import Molecule, PerElem, TokenKind
from chemcalc.parser import Parser, parse_equation, parse_formula, tokenize


def elem(name, coef, pos, length=None):
    return PerElem(name=name, coef=coef, pos=pos, len=length if length is not None else len(name))


class TestParseMolecule(unittest.TestCase):
    def test_elements(self):
        molecule = Parser("CHeH").parse_molecule()
        self.assertEqual(molecule, Molecule([elem("C", 1, 0), elem("He", 1, 1), elem("H", 1, 3)]))

    def test_coefficient(self):
        molecule = Parser("C23").parse_molecule()
        self.assertEqual(molecule, Molecule([elem("C", 23, 0)]))

    def test_parens_distribute_multiplier(self):
        molecule = Parser("(CH3)2").parse_molecule()
        self.assertEqual(molecule, Molecule([elem("C", 2, 1), elem("H", 6, 2)]))

    def test_nested_parens(self):
        molecule = Parser("((CH3)2)3").parse_molecule()
        self.assertEqual([(e.name, e.coef) for e in molecule], [("C", 6), ("H", 18)])

    def test_group_after_element(self):
        molecule = Parser("Ca(OH)2").parse_molecule()
        self.assertEqual([(e.name, e.coef) for e in molecule], [("Ca", 1), ("O", 2), ("H", 2)])

    def test_largest_u32_coefficient(self):
        molecule = Parser("C4294967295").parse_molecule()
        self.assertEqual(molecule[0].coef, 4294967295)

    def test_parsing_is_repeatable(self):
        self.assertEqual(Parser("Mg(NO3)2").parse_molecule(), Parser("Mg(NO3)2").parse_molecule())


class TestParseErrors(unittest.TestCase):
    def assertInputError(self, text, span=None):
        with self.assertRaises(ChemError) as ctx:
            Parser(text).parse_molecule()
        self.assertEqual(ctx.exception.kind, ErrorKind.INPUT)
        if span is not None:
            self.assertEqual(ctx.exception.span, span)
        with self.assertRaises(ChemError):
            Parser(text).parse_reaction()
        return ctx.exception

    def test_empty(self):
        error = self.assertInputError("", span=(0, 1))
        self.assertEqual(error.desc, "Found no periodic element")

    def test_no_uppercase(self):
        self.assertInputError("c", span=(0, 1))

    def test_missing_close_paren(self):
        error = self.assertInputError("(C", span=(2, 1))
        self.assertEqual(error.desc, "Missing closing parentheses")

    def test_missing_open_paren(self):
        error = self.assertInputError("C)", span=(1, 1))
        self.assertEqual(error.desc, "Missing opening parentheses")

    def test_invalid_char(self):
        self.assertInputError("%")

    def test_unexpected_char_after_molecule(self):
        error = self.assertInputError("H2%", span=(2, 1))
        self.assertEqual(error.desc, "Unexpected character")

    def test_invalid_number(self):
        error = self.assertInputError("C999999999999999999999", span=(1, 21))
        self.assertEqual(error.desc, "Could not parse coefficient")

    def test_u32_overflow(self):
        self.assertInputError("C4294967296", span=(1, 10))

    def test_group_multiplier_overflow(self):
        error = self.assertInputError("(C65536)65536", span=(8, 5))
        self.assertEqual(error.desc, "Coefficient too large")

    def test_zero_coefficient(self):
        self.assertInputError("H0", span=(1, 1))

    def test_nesting_too_deep(self):
        error = self.assertInputError("(" * 400 + "C" + ")" * 400, span=(100, 1))
        self.assertEqual(error.desc, "Parentheses nested too deeply")

    def test_nesting_at_limit(self):
        molecule = parse_formula("(" * 100 + "H2" + ")" * 100)
        self.assertEqual(molecule, Molecule([elem("H", 2, 100)]))

    def test_dangling_plus(self):
        with self.assertRaises(ChemError) as ctx:
            Parser("C + -> H").parse_reaction()
        self.assertEqual(ctx.exception.span, (4, 1))


class TestParseSideAndReaction(unittest.TestCase):
    def test_side(self):
        side = Parser("C + H").parse_side()
        self.assertEqual(side, [Molecule([elem("C", 1, 0)]), Molecule([elem("H", 1, 4)])])

    def test_reaction(self):
        reaction = Parser("C -> H").parse_reaction()
        self.assertEqual(reaction.lhs, (Molecule([elem("C", 1, 0)]),))
        self.assertEqual(reaction.rhs, (Molecule([elem("H", 1, 5)]),))

    def test_reaction_without_spaces(self):
        reaction = parse_equation("H2+O2->H2O")
        self.assertEqual(len(reaction.lhs), 2)
        self.assertEqual(len(reaction.rhs), 1)

    def test_missing_arrow(self):
        with self.assertRaises(ChemError) as ctx:
            parse_equation("C + H")
        self.assertEqual(ctx.exception.desc, "Missing arrow (->) in chemical reaction")
        self.assertEqual(ctx.exception.span, (5, 1))

    def test_trailing_input_after_reaction(self):
        with self.assertRaises(ChemError) as ctx:
            parse_equation("C -> H H")
        self.assertEqual(ctx.exception.span, (7, 1))

    def test_is_done(self):
        self.assertTrue(Parser("    ").is_done())
        self.assertFalse(Parser("    C").is_done())


class TestParseFormula(unittest.TestCase):
    def test_surrounding_whitespace_is_ignored(self):
        molecule = parse_formula("  H2O ")
        self.assertEqual(molecule[0], elem("H", 2, 2))

    def test_whitespace_inside_molecule(self):
        with self.assertRaises(ChemError) as ctx:
            parse_formula("C H")
        self.assertEqual(ctx.exception.kind, ErrorKind.INPUT)
        self.assertEqual(ctx.exception.span, (2, 1))

    def test_arrow_is_not_a_formula(self):
        with self.assertRaises(ChemError):
            parse_formula("C->H")


class TestTokens(unittest.TestCase):
    def test_formula_tokens(self):
        tokens = tokenize("(CH3)2")
        self.assertEqual(
            [t.kind for t in tokens],
            [
                TokenKind.PAREN_OPEN,
                TokenKind.ELEMENT,
                TokenKind.ELEMENT,
                TokenKind.COEFFICIENT,
                TokenKind.PAREN_CLOSE,
                TokenKind.COEFFICIENT,
            ],
        )
        self.assertEqual([(t.pos, t.len) for t in tokens][-1], (5, 1))

    def test_reaction_tokens(self):
        tokens = tokenize("He + Ne -> HeNe")
        self.assertEqual([t.text for t in tokens], ["He", "+", "Ne", "->", "He", "Ne"])
        self.assertEqual(tokens[3].pos, 8)

    def test_leading_whitespace_keeps_offsets(self):
        tokens = tokenize("  C -> C")
        self.assertEqual([(t.text, t.pos) for t in tokens], [("C", 2), ("->", 4), ("C", 7)])
        reaction = parse_equation("  C -> C")
        self.assertEqual(reaction.rhs[0][0], elem("C", 1, 7))


if __name__ == '__main__':
    unittest.main()
