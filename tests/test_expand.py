from utterance_generator.core.expand.expand_template import count_expansions, expand, iter_expand


def test_plain_template_is_returned_unchanged():
    assert expand("what time is it") == ["what time is it"]


def test_alternation_group():
    assert expand("play (rock|jazz|pop)") == ["play rock", "play jazz", "play pop"]


def test_optional_group():
    assert expand("turn (|the) light on") == ["turn the light on", "turn light on"]
    assert expand("turn (the|) light on") == ["turn the light on", "turn light on"]


def test_slot_group_keeps_wrapper_and_name():
    assert expand("book a {(one|two|three)|PartySize} table") == [
        "book a {one|PartySize} table",
        "book a {two|PartySize} table",
        "book a {three|PartySize} table",
    ]


def test_single_word_group_is_never_optional():
    assert expand("turn (now) on") == ["turn now on"]


def test_multiple_groups_cross_product_in_order():
    assert expand("(play|start) (rock|jazz|pop)") == [
        "play rock",
        "play jazz",
        "play pop",
        "start rock",
        "start jazz",
        "start pop",
    ]


def test_optional_and_slot_compose():
    assert expand("(|please) call {(mom|dad)|Contact}") == [
        "please call {mom|Contact}",
        "please call {dad|Contact}",
        "call {mom|Contact}",
        "call {dad|Contact}",
    ]


def test_multi_word_alternatives():
    assert expand("(turn on|switch on) the light") == ["turn on the light", "switch on the light"]


def test_sequence_is_concatenated_without_dedup():
    assert expand(["go (left|right)", "go left"]) == ["go left", "go right", "go left"]


def test_iter_expand_is_lazy_and_matches_expand():
    it = iter_expand("(a|b) (c|d)")
    assert next(it) == "a c"
    assert list(it) == ["a d", "b c", "b d"]


def test_count_expansions_matches_expand():
    templates = [
        "play (rock|jazz|pop)",
        "turn (|the) light on",
        "book a {(one|two|three)|PartySize} (|nice) table",
        "hello",
    ]
    for template in templates:
        assert count_expansions(template) == len(expand(template))
    assert count_expansions(templates) == len(expand(templates))


def test_expansion_is_deterministic():
    template = "(hi|hello) (|there) {(bob|alice)|Name}"
    assert expand(template) == expand(template)
