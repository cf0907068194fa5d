from genre_topics.core.stopword_removal.config import StopwordConfig
from genre_topics.core.stopword_removal.removal import DefaultStopwordRemover
from genre_topics.core.tokenization.analyzer import TextAnalyzer
from genre_topics.core.tokenization.config import TokenizationConfig
from genre_topics.core.tokenization.tokenizer import DefaultTokenizer


def test_tokenizer_lowercases_and_splits_on_non_alphanumerics():
    tok = DefaultTokenizer()
    assert tok.tokenize("Hello, World! It's R2-D2.") == [
        "hello",
        "world",
        "it",
        "s",
        "r2",
        "d2",
    ]


def test_tokenizer_handles_empty_and_missing_text():
    tok = DefaultTokenizer()
    assert tok.tokenize("") == []
    assert tok.tokenize(None) == []
    assert tok.tokenize("!!! ---") == []


def test_tokenizer_filters():
    tok = DefaultTokenizer(
        TokenizationConfig(min_token_len=3, remove_numbers_only=True)
    )
    assert tok.tokenize("An ox and 1984 robots") == ["and", "robots"]


def test_stopword_remover_returns_cleaned_and_removed():
    remover = DefaultStopwordRemover()
    cleaned, removed = remover.remove(["The", "robot", "and", "the", "army"])
    assert cleaned == ["robot", "army"]
    assert removed == ["The", "and", "the"]


def test_stopword_remover_custom_and_excluded_words():
    remover = DefaultStopwordRemover(
        StopwordConfig(
            custom_stopwords=frozenset({"film"}), exclude_stopwords=frozenset({"alone"})
        )
    )
    cleaned, _ = remover.remove(["film", "alone", "robot"])
    assert cleaned == ["alone", "robot"]


def test_negations_preserved_only_when_asked():
    tokens = ["not", "never", "robot"]
    assert DefaultStopwordRemover().remove(tokens)[0] == ["robot"]
    keep = DefaultStopwordRemover(StopwordConfig(preserve_negations=True))
    assert keep.remove(tokens)[0] == tokens


def test_text_analyzer_chains_tokenizer_and_stopwords():
    analyzer = TextAnalyzer(DefaultTokenizer(), DefaultStopwordRemover())
    assert analyzer.terms("The robot and THE army!") == ["robot", "army"]
    assert analyzer.terms("") == []


def test_stopword_check_ignores_case():
    remover = DefaultStopwordRemover()
    assert remover.is_stopword("The")
    assert not remover.is_stopword("robot")
