from listing_catalog.query.state import QueryState


def test_default_state_encodes_to_empty():
    state = QueryState()
    assert state.to_query_string() == ""
    assert state.has_active_filters is False


def test_only_non_default_values_are_encoded():
    state = QueryState(search="motion to dismiss", person="Timothy Jackson")
    assert state.to_query_string() == "search=motion+to+dismiss&person=Timothy+Jackson"


def test_round_trip():
    state = QueryState(search="exhibit", sort="date", order="desc", person="Rachel Gain", type="document")
    assert QueryState.from_query_string(state.to_query_string()) == state
    assert state.has_active_filters is True


def test_from_query_string_accepts_leading_question_mark():
    state = QueryState.from_query_string("?sort=size&type=video")
    assert state.sort == "size"
    assert state.type == "video"
    assert state.person == "all"
    assert state.search == ""


def test_unknown_values_fall_back_to_defaults():
    state = QueryState.from_query_string("sort=colour&order=sideways&person=")
    assert state == QueryState()


def test_empty_query_string():
    assert QueryState.from_query_string("") == QueryState()
    assert QueryState.from_query_string(None) == QueryState()
