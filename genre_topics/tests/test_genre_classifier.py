import itertools

from genre_topics.core.genre_classification.classifier import KeywordGenreClassifier
from genre_topics.core.genre_classification.config import (
    GenreRule,
    GenreRulesConfig,
    default_rules,
)

classifier = KeywordGenreClassifier()


def test_soldier_plot_is_war():
    assert classifier.classify("a lone soldier faces the enemy army in battle") == "War"


def test_empty_text_falls_back_to_other():
    assert classifier.classify("") == "Other"


# -------------------------------------
# ❌ Texts that can never match a rule
# -------------------------------------
def test_none_whitespace_and_non_alphabetic_text_fall_back():
    for text in (None, "   ", "1234 !!! ???", "..."):
        assert classifier.classify(text) == "Other"


def test_unmatched_text_falls_back():
    assert classifier.classify("a quiet afternoon at the bakery") == "Other"


def test_earlier_rule_wins_for_every_pair_of_rules():
    rules = default_rules()
    for (i, first), (j, second) in itertools.combinations(enumerate(rules), 2):
        text = f"{second.keywords[0]} and then {first.keywords[0]}"
        assert classifier.classify(text) == first.label, (i, j, text)


def test_priority_comes_from_rule_order_not_label():
    cfg = GenreRulesConfig(
        rules=(GenreRule("Zeta", ("heist",)), GenreRule("Alpha", ("heist",)))
    )
    assert KeywordGenreClassifier(cfg).classify("The Heist") == "Zeta"


def test_matching_is_case_insensitive_and_whole_word():
    assert classifier.classify("GHOSTS in the attic") == "Horror"
    # "war" inside other words must not count
    assert classifier.classify("toward the award ceremony") == "Other"


def test_multi_word_keyword_allows_any_whitespace():
    assert classifier.classify("a time \n travel paradox") == "Sci-Fi"


def test_classification_is_independent_of_input_order():
    texts = [
        "a cowboy rides into town",
        "the detective solves a murder",
        "they fall in love in paris",
        "",
        "a wizard and a dragon",
    ]
    forward = [classifier.classify(t) for t in texts]
    backward = [classifier.classify(t) for t in reversed(texts)]
    assert forward == list(reversed(backward))
    assert forward == ["Western", "Crime", "Romance", "Other", "Fantasy"]


def test_labels_lists_rules_in_priority_order_then_default():
    labels = classifier.labels
    assert labels[0] == "Sci-Fi"
    assert labels[-1] == "Other"
    assert len(labels) == len(default_rules()) + 1


def test_rule_without_keywords_never_matches():
    cfg = GenreRulesConfig(
        rules=(GenreRule("Empty", ()), GenreRule("War", ("soldier",)))
    )
    clf = KeywordGenreClassifier(cfg)
    assert clf.classify("a soldier") == "War"
    assert clf.classify("anything else") == "Other"
