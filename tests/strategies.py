from hypothesis import strategies as st

from scrobbler.lastfm import ParameterSet

# Non-empty, tab-free text that survives a UTF-8 round trip.
token_strat = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="\t"),
    min_size=1,
    max_size=20,
)


@st.composite
def param_pairs_strat(draw, max_size=10):
    """Unique-key (key, value) pairs in arbitrary order."""
    mapping = draw(st.dictionaries(token_strat, token_strat, max_size=max_size))
    return draw(st.permutations(list(mapping.items())))


@st.composite
def parameter_set_strat(draw):
    return ParameterSet(draw(param_pairs_strat()))
