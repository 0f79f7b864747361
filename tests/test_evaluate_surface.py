from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for evaluate() surface tests")
class EvaluateScenarioTests(unittest.TestCase):
    def test_concrete_scenarios(self) -> None:
        from j_jax import evaluate

        cases = [
            ("~3+~3", "0 2 4"),
            ("2 3#~6", "0 1 2\n3 4 5"),
            ("1+2+3+4", "10"),
            ("4{~7", "4"),
            ("1,2,3,4", "1 2 3 4"),
        ]
        for source, expected in cases:
            with self.subTest(source=source):
                self.assertEqual(evaluate(source), expected)

    def test_unknown_verb_is_a_tokenize_error(self) -> None:
        from j_jax import evaluate

        self.assertEqual(
            evaluate("(1+2)*3"),
            "Error: Tokenize error: Unrecognized character '*' at index 5",
        )

    def test_errors_are_rendered_with_stage_prefix(self) -> None:
        from j_jax import evaluate

        cases = [
            ("", "Error: Parse error: Unexpected end of input"),
            ("(1+2", "Error: Parse error: Unclosed parenthesis"),
            ("{1", "Error: Semantic error: Verb '{' has no monadic form"),
            ("7{~7", "Error: Evaluation error: { index 7 is outside [0, 7)"),
            ("1 2+1 2 3", "Error: Evaluation error:"),
            ("99999999999", "Error: Tokenize error: Invalid number"),
            ("9" * 5000, "Error: Tokenize error: Invalid number"),
        ]
        for source, prefix in cases:
            with self.subTest(source=source):
                self.assertTrue(evaluate(source).startswith(prefix), evaluate(source))

    def test_pathological_nesting_returns_an_error_instead_of_crashing(self) -> None:
        from j_jax import evaluate

        for source in ("(" * 5000 + "1" + ")" * 5000, "1+" * 5000 + "1", "~" * 5000 + "3"):
            with self.subTest(size=len(source)):
                self.assertTrue(evaluate(source).startswith("Error: Evaluation error: Nesting depth exceeds"))

    def test_huge_allocation_returns_an_error(self) -> None:
        from j_jax import evaluate

        self.assertTrue(evaluate("1000 1000 1000#1").startswith("Error: Evaluation error: Array of"))

    def test_calls_share_no_state(self) -> None:
        from j_jax import evaluate

        self.assertEqual(evaluate("~3"), "0 1 2")
        self.assertTrue(evaluate("{").startswith("Error: "))
        self.assertEqual(evaluate("~3"), "0 1 2")


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for execute() tests")
class ExecuteTests(unittest.TestCase):
    def test_execute_returns_array_values(self) -> None:
        from j_jax import JArray, execute

        self.assertEqual(execute("2 2#~4"), JArray(shape=(2, 2), data=(0, 1, 2, 3)))
        self.assertEqual(execute("1+2"), JArray.scalar(3))

    def test_execute_raises_structured_errors(self) -> None:
        from j_jax import NoMonadicForm, UnrecognizedCharacter, execute

        with self.assertRaises(NoMonadicForm):
            execute("{1")
        with self.assertRaises(UnrecognizedCharacter) as ctx:
            execute("1*2")
        self.assertEqual(ctx.exception.stage, "Tokenize")

    def test_execute_with_debug_returns_ambiguous_tree(self) -> None:
        from j_jax import JArray, execute_with_debug

        result, tree = execute_with_debug("~3+~3")
        self.assertEqual(result, JArray.vector([0, 2, 4]))
        self.assertEqual(
            tree.splitlines(),
            [
                "Parse Tree:",
                "AmbiguousVerb: '+'",
                "Left:",
                "  AmbiguousVerb: '~'",
                "  Right:",
                "    Literal: 3",
                "Right:",
                "  AmbiguousVerb: '~'",
                "  Right:",
                "    Literal: 3",
            ],
        )

    def test_caller_limits_apply_to_every_stage(self) -> None:
        from j_jax import ArrayTooLarge, EvaluationLimits, RecursionLimitExceeded, execute

        with self.assertRaises(RecursionLimitExceeded):
            execute("((((1))))", limits=EvaluationLimits(max_depth=3))
        with self.assertRaises(ArrayTooLarge):
            execute("~20", limits=EvaluationLimits(max_elements=10))

    def test_each_dyadic_link_counts_toward_the_depth_limit(self) -> None:
        from j_jax import EvaluationLimits, JArray, RecursionLimitExceeded, execute

        chain = ",".join(["1"] * 250)
        with self.assertRaises(RecursionLimitExceeded):
            execute(chain, limits=EvaluationLimits(max_depth=200))
        self.assertEqual(execute(chain, limits=EvaluationLimits(max_depth=300)), JArray.vector([1] * 250))

    def test_limits_must_be_positive(self) -> None:
        from j_jax import EvaluationLimits

        with self.assertRaises(ValueError):
            EvaluationLimits(max_depth=0)
        with self.assertRaises(ValueError):
            EvaluationLimits(max_elements=0)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for evaluate() property tests")
class EvaluatePropertyTests(unittest.TestCase):
    def test_literals_display_canonically(self) -> None:
        from j_jax import evaluate

        for source, expected in (("42", "42"), ("1 2 3", "1 2 3"), ("007 10", "7 10"), (" 5 ", "5")):
            with self.subTest(source=source):
                self.assertEqual(evaluate(source), expected)

    def test_iota_enumerates(self) -> None:
        from j_jax import evaluate

        for n in range(0, 9):
            with self.subTest(n=n):
                self.assertEqual(evaluate(f"~{n}"), " ".join(str(i) for i in range(n)))
        self.assertTrue(evaluate("~(0-4)").startswith("Error: Evaluation error:"))

    def test_addition_commutes(self) -> None:
        from j_jax import evaluate

        pairs = [("1 2 3", "4 5 6"), ("0 0", "9 1"), ("5", "2"), ("10 20 30 40", "1 1 1 1")]
        for a, b in pairs:
            with self.subTest(a=a, b=b):
                self.assertEqual(evaluate(f"{a}+{b}"), evaluate(f"{b}+{a}"))

    def test_ravel_of_reshape_cycles_the_data(self) -> None:
        from j_jax import evaluate

        cases = [
            ("2 3", "1 2 3 4", "1 2 3 4 1 2"),
            ("2 2", "1 2 3 4 5 6", "1 2 3 4"),
            ("3", "9", "9 9 9"),
            ("1 4", "7 8", "7 8 7 8"),
        ]
        for shape, data, expected in cases:
            with self.subTest(shape=shape, data=data):
                self.assertEqual(evaluate(f",({shape}#{data})"), expected)

    def test_from_indexes_within_bounds_only(self) -> None:
        from j_jax import evaluate

        v = "10 20 30 40"
        for i, expected in enumerate(v.split()):
            with self.subTest(i=i):
                self.assertEqual(evaluate(f"{i}{{{v}"), expected)
        self.assertTrue(evaluate(f"4{{{v}").startswith("Error: Evaluation error:"))

    def test_concatenation_length_is_additive(self) -> None:
        from j_jax import evaluate

        for a, b in (("1 2", "3 4 5"), ("~4", "~0"), ("7", "8 9")):
            with self.subTest(a=a, b=b):
                total = int(evaluate(f"#({a})")) + int(evaluate(f"#({b})"))
                self.assertEqual(evaluate(f"#(({a}),{b})"), str(total))


if __name__ == "__main__":
    unittest.main()
