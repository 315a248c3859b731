"""Tests for the predicate algebra."""

import pytest
from funcops import Predicate, always, and_, never, not_, or_, predicate
from funcops.predicates import AllOf, AnyOf, Not
from hypothesis import given
from strategies import booleans, integers


class Observed:
    """Predicate recording whether it was evaluated."""

    def __init__(self, result: bool) -> None:
        self.result = result
        self.calls = 0

    def __call__(self, *args, **kwargs) -> bool:
        self.calls += 1
        return self.result


def is_positive(n: int) -> bool:
    return n > 0


def is_even(n: int) -> bool:
    return n % 2 == 0


class TestAnd:
    """Tests for and_()."""

    def test_truth_table(self):
        """and_ is true only when both are."""
        assert and_(is_positive, is_even)(4) is True
        assert and_(is_positive, is_even)(3) is False
        assert and_(is_positive, is_even)(-2) is False

    def test_short_circuits_on_false(self):
        """When the first predicate is false the second is never evaluated."""
        observer = Observed(True)
        assert and_(lambda x: False, observer)(1) is False
        assert observer.calls == 0

    def test_evaluates_second_when_needed(self):
        """When the first predicate is true the second decides."""
        observer = Observed(False)
        assert and_(lambda x: True, observer)(1) is False
        assert observer.calls == 1

    def test_variadic(self):
        """More than two operands are evaluated left to right."""
        order = []

        def mark(name, result):
            def pred(x):
                order.append(name)
                return result

            return pred

        assert and_(mark('a', True), mark('b', False), mark('c', True))(0) is False
        assert order == ['a', 'b']

    def test_failure_propagates(self):
        """Exceptions from an evaluated operand are unchanged."""

        def boom(x):
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            and_(always, boom)(1)

    def test_skipped_failure_is_not_raised(self):
        """A skipped operand cannot fail the evaluation."""

        def boom(x):
            raise ZeroDivisionError

        assert and_(never, boom)(1) is False


class TestOr:
    """Tests for or_()."""

    def test_truth_table(self):
        """or_ is true when either is."""
        assert or_(is_positive, is_even)(-2) is True
        assert or_(is_positive, is_even)(3) is True
        assert or_(is_positive, is_even)(-3) is False

    def test_short_circuits_on_true(self):
        """When the first predicate is true the second is never evaluated."""
        observer = Observed(False)
        assert or_(lambda x: True, observer)(1) is True
        assert observer.calls == 0

    def test_evaluates_second_when_needed(self):
        """When the first predicate is false the second decides."""
        observer = Observed(True)
        assert or_(lambda x: False, observer)(1) is True
        assert observer.calls == 1


class TestNot:
    """Tests for not_()."""

    def test_complements(self):
        """not_(p)(x) == not p(x)."""
        assert not_(is_even)(3) is True
        assert not_(is_even)(4) is False

    def test_failure_propagates(self):
        """Exceptions from the operand are unchanged."""
        with pytest.raises(TypeError):
            not_(is_even)('x')


class TestPredicateOperators:
    """Tests for the Predicate operator syntax."""

    def test_operators_build_tree(self):
        """&, | and ~ build and_/or_/not_ nodes."""
        positive = Predicate(is_positive)
        even = Predicate(is_even)
        assert isinstance(positive & even, AllOf)
        assert isinstance(positive | even, AnyOf)
        assert isinstance(~positive, Not)

    def test_operator_semantics(self):
        """Combined predicates evaluate as expected."""
        positive = predicate(is_positive)
        even = predicate(is_even)
        rule = (positive & ~even) | (lambda n: n == -4)
        assert [n for n in range(-5, 6) if rule(n)] == [-4, 1, 3, 5]

    def test_reflected_operators_with_plain_functions(self):
        """A plain function on the left combines with a Predicate on the right."""
        rule = is_positive & predicate(is_even)
        assert isinstance(rule, AllOf)
        assert rule(2) is True
        assert rule(-2) is False

    def test_same_kind_nodes_flatten(self):
        """Chained & keeps one flat operand list in order."""
        a, b, c = Predicate(is_positive), Predicate(is_even), Predicate(lambda n: n < 10)
        rule = a & b & c
        assert rule.operands == (a, b, c)
        assert rule(4) is True
        assert rule(12) is False

    def test_results_are_bool(self):
        """Truthy values are coerced to bool."""
        assert Predicate(len)([1, 2]) is True
        assert Predicate(len)([]) is False

    def test_constants(self):
        """always and never ignore their arguments."""
        assert always(1, 2, key='x') is True
        assert never() is False

    def test_non_callable_rejected(self):
        """Predicates must be callable."""
        with pytest.raises(TypeError):
            Predicate(3)
        with pytest.raises(TypeError):
            and_(is_even, 'nope')

    def test_repr(self):
        """repr shows the predicate tree."""
        assert repr(and_(is_positive, not_(is_even))) == 'and_(is_positive, not_(is_even))'

    @given(p=booleans, q=booleans, x=integers)
    def test_matches_python_boolean_logic(self, p, q, x):
        """and_/or_/not_ agree with Python's and/or/not."""
        fp = Predicate(lambda _: p)
        fq = Predicate(lambda _: q)
        assert and_(fp, fq)(x) is (p and q)
        assert or_(fp, fq)(x) is (p or q)
        assert not_(fp)(x) is (not p)
