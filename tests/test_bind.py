"""Tests for argument binding: bind() and splat()."""

import inspect
import operator

import pytest
from funcops import Bound, bind, splat


def volume(length, width, height):
    return length * width * height


def describe(name, greeting='Hello', *, punctuation='!'):
    return f'{greeting}, {name}{punctuation}'


class TestBind:
    """Tests for bind()."""

    def test_leading_positional(self):
        """Bound positionals fill the first parameters."""
        assert bind(volume, 2)(3, 4) == 24
        assert bind(volume, 2, 3)(4) == 24

    def test_named_binding_skips_parameter(self):
        """Positions not bound by name are filled left to right by the call's positionals."""
        flat = bind(volume, width=10)
        assert flat(2, 3) == 60  # length=2, height=3

    def test_named_binding_of_first_parameter(self):
        """Binding the first parameter by name shifts call positionals to the next ones."""
        unit = bind(volume, length=1)
        assert unit(5, 7) == 35

    def test_named_bound_wins_over_call_keyword(self):
        """Re-supplying a bound name at call time is rejected."""
        flat = bind(volume, height=1)
        with pytest.raises(TypeError, match='already bound'):
            flat(1, 2, height=5)

    def test_call_keywords_pass_through(self):
        """Unbound named parameters can be given at call time."""
        greet = bind(describe, greeting='Hi')
        assert greet('Ann') == 'Hi, Ann!'
        assert greet('Ann', punctuation='?') == 'Hi, Ann?'

    def test_loop_binders_keep_their_own_value(self):
        """Binders built in a loop each keep the value current at their creation."""
        binders = [bind(operator.add, i) for i in range(3)]
        assert [b(0) for b in binders] == [0, 1, 2]

    def test_bound_container_is_snapshotted(self):
        """Mutating a bound list after binding is not observed."""
        items = [1, 2]
        count = bind(len, items)
        items.append(3)
        assert count() == 2

    def test_bound_dict_is_snapshotted(self):
        """Mutating a bound dict after binding is not observed."""
        options = {'greeting': 'Hey'}
        greet = bind(describe, **options)
        options['greeting'] = 'Yo'
        assert greet('Bo') == 'Hey, Bo!'

    def test_binders_are_independent(self):
        """Binding the same function twice never shares state."""
        a = bind(volume, 1)
        b = bind(volume, 2)
        assert a(1, 1) == 1
        assert b(1, 1) == 2
        assert a.args == (1,)
        assert b.args == (2,)

    def test_varargs_receive_surplus(self):
        """Extra positionals flow into *args."""

        def total(first, *rest):
            return first + sum(rest)

        assert bind(total, 1)(2, 3) == 6
        assert bind(total, 1, 2, 3)() == 6

    def test_varkw_accepts_unknown_names(self):
        """Names unknown to the signature go to **kwargs."""

        def collect(**kwargs):
            return kwargs

        assert bind(collect, a=1)(b=2) == {'a': 1, 'b': 2}

    def test_positional_only_by_name(self):
        """A positional-only parameter can be bound by name."""

        def power(base, exp, /):
            return base**exp

        assert bind(power, exp=2)(5) == 25

    def test_unknown_name_rejected_at_bind_time(self):
        """Binding a name the function cannot accept fails immediately."""
        with pytest.raises(TypeError, match='unexpected keyword'):
            bind(volume, depth=3)

    def test_too_many_positionals_rejected_at_bind_time(self):
        """Binding more positionals than the function takes fails immediately."""
        with pytest.raises(TypeError):
            bind(volume, 1, 2, 3, 4)

    def test_name_bound_twice_rejected(self):
        """A parameter cannot be bound both positionally and by name."""
        with pytest.raises(TypeError, match='multiple values'):
            bind(volume, 1, length=2)

    def test_too_many_call_positionals(self):
        """Surplus call positionals without *args raise TypeError."""
        with pytest.raises(TypeError):
            bind(volume, 1)(2, 3, 4)

    def test_missing_arguments_raise_from_function(self):
        """Unfilled required parameters surface as the function's TypeError."""
        with pytest.raises(TypeError):
            bind(volume, 1)(2)

    def test_signature_reports_remaining_parameters(self):
        """inspect.signature shows only the unbound parameters."""
        assert list(inspect.signature(bind(volume, 1, height=3)).parameters) == ['width']
        assert list(inspect.signature(bind(describe, 'Ann')).parameters) == ['greeting', 'punctuation']

    def test_nested_bind(self):
        """A Bound can itself be bound."""
        assert bind(bind(volume, 2), 3)(4) == 24

    def test_failure_propagates(self):
        """Exceptions raised by the function are unchanged."""

        def boom(x):
            raise LookupError(x)

        with pytest.raises(LookupError):
            bind(boom, 1)()

    def test_partial_like_attributes_and_repr(self):
        """func, args, keywords and repr mirror functools.partial."""
        bound = bind(volume, 1, height=2)
        assert isinstance(bound, Bound)
        assert bound.func is volume
        assert bound.keywords == {'height': 2}
        assert repr(bound) == 'bind(volume, 1, height=2)'
        assert bound.__name__ == 'volume'

    def test_non_callable_rejected(self):
        """bind() requires a callable."""
        with pytest.raises(TypeError):
            bind(42, 1)


class TestSplat:
    """Tests for splat()."""

    def test_sequence_spread_positionally(self):
        """A sequence becomes positional arguments."""
        assert list(map(splat(operator.add), [(1, 2), (3, 4)])) == [3, 7]

    def test_mapping_spread_by_name(self):
        """A mapping becomes named arguments."""
        assert splat(volume)({'length': 1, 'width': 2, 'height': 3}) == 6

    def test_requires_single_argument(self):
        """The splatted function takes exactly one collection."""
        with pytest.raises(TypeError):
            splat(volume)((1, 2, 3), 4)
