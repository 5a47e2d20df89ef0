"""
NFA: construction checks, ε-closure, direct simulation, pruning and
canonical form.
"""

import pytest

from fsmkit import (
    DFA,
    NFA,
    State,
    Transition,
    UnknownSymbolError,
    ValidationError,
    canonicalize,
    decode_dfa,
    decode_nfa,
    epsilon_closures,
    prune,
)


def _states(*labels):
    return frozenset(State(x) for x in labels)


class TestConstruction:
    """Validation of the components."""

    def test_initial_state_must_be_a_state(self):
        with pytest.raises(ValidationError, match="initial state"):
            NFA([State(0)], "a", [], State(1))

    def test_accepting_states_must_be_states(self):
        with pytest.raises(ValidationError, match="subset"):
            NFA([State(0)], "a", [], State(0), [State(0), State(4)])

    def test_transition_to_unknown_state(self):
        with pytest.raises(ValidationError, match="unknown state"):
            NFA([State(0)], "a", [Transition(State(0), "a", State(1))], State(0))

    def test_alphabet_from_iterable(self):
        nfa = NFA([State(0)], ["x", "y"], [], State(0))
        assert nfa.alphabet.symbols == ("x", "y")

    def test_components_are_frozen(self, sample_nfa):
        assert isinstance(sample_nfa.states, frozenset)
        assert isinstance(sample_nfa.accepting_states, frozenset)
        with pytest.raises(AttributeError):
            sample_nfa.states = frozenset()


class TestEpsilonClosure:
    """Full transitive closure over ε-moves."""

    def test_sample_closures(self, sample_nfa):
        closures = epsilon_closures(sample_nfa)
        assert closures[State(0)] == _states(0, 1, 3)
        assert closures[State(1)] == _states(1, 3)
        assert closures[State(2)] == _states(1, 2, 3)
        assert closures[State(3)] == _states(3)

    def test_long_chain(self):
        """Chains longer than two hops are followed to the end."""
        nfa = decode_nfa("0 1 2 3 4/a/0,e,1;1,e,2;2,e,3;3,e,4/0/4")
        closures = nfa.epsilon_closures()
        assert closures[State(0)] == _states(0, 1, 2, 3, 4)
        assert closures[State(2)] == _states(2, 3, 4)
        assert nfa.simulate("")
        assert nfa.compute("")

    def test_cycle(self):
        nfa = decode_nfa("0 1 2/a/0,e,1;1,e,0;1,a,2/0/")
        closures = nfa.epsilon_closures()
        assert closures[State(0)] == closures[State(1)] == _states(0, 1)
        assert closures[State(2)] == _states(2)

    def test_closure_is_total(self, random_nfas):
        for nfa in random_nfas:
            assert set(epsilon_closures(nfa)) == set(nfa.states)

    def test_reflexive_and_transitive(self, random_nfas):
        for nfa in random_nfas:
            closures = epsilon_closures(nfa)
            for a, reach in closures.items():
                assert a in reach
                for b in reach:
                    assert closures[b] <= reach

    def test_closure_of_a_set(self, sample_nfa):
        assert sample_nfa.eps_closure({State(2), State(0)}) == _states(0, 1, 2, 3)
        assert sample_nfa.eps_closure(set()) == frozenset()


class TestSimulate:
    """Direct evaluation on sets of states."""

    @pytest.mark.parametrize("word, expected", [("", True), ("abbb", True), ("aabbb", False), ("b", True)])
    def test_sample_words(self, sample_nfa, word, expected):
        assert sample_nfa.simulate(word) is expected

    def test_move_without_closure(self, sample_nfa):
        assert sample_nfa.move({State(0), State(2)}, "a") == _states(1, 2, 3)

    def test_unknown_symbol(self, sample_nfa):
        with pytest.raises(UnknownSymbolError) as info:
            sample_nfa.simulate("abx")
        assert info.value.symbol == "x"
        assert info.value.position == 2

    def test_agrees_with_reference(self, random_nfas, reference_accepts, words_upto):
        for nfa in random_nfas:
            for w in words_upto("ab", 4):
                assert nfa.simulate(w) == reference_accepts(nfa, w)


class TestPrune:
    """Unreachable-state removal."""

    def test_drops_unreachable(self):
        nfa = decode_nfa("0 1 2 3/a/0,a,1;2,a,0;2,e,3/0/2 1")
        pruned = prune(nfa)
        assert pruned.states == _states(0, 1)
        assert pruned.accepting_states == _states(1)
        assert pruned.encode() == "0 1/a/0,a,1/0/1"

    def test_follows_epsilon(self):
        nfa = decode_nfa("0 1 2/a/0,e,1;1,a,2/0/2")
        assert nfa.remove_unreachable_states() == nfa

    def test_idempotent(self, random_nfas):
        for nfa in random_nfas:
            once = prune(nfa)
            assert prune(once) == once

    def test_keeps_language(self, random_nfas, words_upto):
        for nfa in random_nfas:
            pruned = prune(nfa)
            for w in words_upto("ab", 4):
                assert pruned.simulate(w) == nfa.simulate(w)

    def test_keeps_kind(self):
        dfa = decode_dfa("0 1 2/a/0,a,0;1,a,2;2,a,1/0/2")
        pruned = prune(dfa)
        assert isinstance(pruned, DFA)
        assert pruned.states == _states(0)
        assert pruned.accepting_states == frozenset()

    def test_input_unchanged(self, sample_nfa):
        before = sample_nfa.encode()
        prune(sample_nfa)
        canonicalize(sample_nfa)
        sample_nfa.to_dfa()
        assert sample_nfa.encode() == before


class TestCanonicalForm:
    """Breadth-first renumbering."""

    def test_relabels_in_visit_order(self):
        nfa = decode_nfa("5 7 9/a/5,a,9;9,a,7/5/7")
        assert canonicalize(nfa).encode() == "0 1 2/a/0,a,1;1,a,2/0/2"

    def test_symbols_before_epsilon(self):
        nfa = decode_nfa("3 4 8/a/3,e,8;3,a,4/3/")
        assert nfa.to_canonic_form().encode() == "0 1 2/a/0,a,1;0,e,2/0/"

    def test_destinations_in_label_order(self):
        nfa = decode_nfa("1 20 30/a/1,a,30;1,a,20/1/30")
        assert canonicalize(nfa).encode() == "0 1 2/a/0,a,1;0,a,2/0/2"

    def test_drops_unreachable(self):
        nfa = decode_nfa("4 6/a/4,a,4/4/6")
        assert canonicalize(nfa).encode() == "0/a/0,a,0/0/"

    def test_deterministic(self, random_nfas):
        for nfa in random_nfas:
            assert canonicalize(nfa).encode() == canonicalize(nfa).encode()

    def test_isomorphic_machines_agree(self):
        one = decode_nfa("0 1 2/a b/0,a,1;0,b,2;1,e,2;2,a,0/0/2")
        two = decode_nfa("7 3 5/a b/7,a,3;7,b,5;3,e,5;5,a,7/7/5")
        assert canonicalize(one).encode() == canonicalize(two).encode()

    def test_isomorphic_dfas_agree(self):
        one = decode_dfa("0 1 2/0 1/0,0,0;0,1,1;1,0,2;1,1,0;2,0,1;2,1,2/0/0")
        two = decode_dfa("5 2 9/0 1/5,0,5;5,1,2;2,0,9;2,1,5;9,0,2;9,1,9/5/5")
        assert canonicalize(one).encode() == canonicalize(two).encode()

    def test_nfa_ties_keep_label_order(self):
        """two a-successors of the initial state are numbered by their old labels"""
        one = decode_nfa("0 1 2/a b/0,a,1;0,a,2;1,b,1/0/1")
        two = decode_nfa("0 1 2/a b/0,a,1;0,a,2;2,b,2/0/2")
        assert canonicalize(one).encode() == "0 1 2/a b/0,a,1;0,a,2;1,b,1/0/1"
        assert canonicalize(two).encode() == "0 1 2/a b/0,a,1;0,a,2;2,b,2/0/2"

    def test_fixed_point(self, random_nfas):
        for nfa in random_nfas:
            once = canonicalize(nfa)
            assert canonicalize(once) == once

    def test_equals_pruned_machine_up_to_labels(self, random_nfas):
        for nfa in random_nfas:
            assert canonicalize(prune(nfa)) == canonicalize(nfa)
