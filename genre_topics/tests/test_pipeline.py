import numpy as np
import pytest

from genre_topics.core.term_matrix.base import TermMatrixBuilder
from genre_topics.core.term_matrix.config import TermMatrixConfig
from genre_topics.core.topic_modeling.config import (
    TopicEstimationConfig,
    TopicModelConfig,
)
from genre_topics.services.pipeline_config import PipelineConfig
from genre_topics.services.pipeline_service import GenreTopicService
from genre_topics.utils.exceptions import EmptyCorpusError, EmptyVocabularyError


def _service(**overrides):
    cfg = PipelineConfig(topic_model=TopicModelConfig(num_topics=3))
    return GenreTopicService.from_config(cfg.with_overrides(overrides))


class _FixedMatrixBuilder(TermMatrixBuilder):
    def __init__(self, matrix):
        self.matrix = matrix

    def build(self, documents, term_lists):
        return self.matrix


def test_exclusive_terms_end_to_end(exclusive_term_records):
    result = _service().run(exclusive_term_records)

    assert result.matrix.row_ids == ("Romance", "Sci-Fi", "War")
    top1 = {
        tid: result.summary.topics[tid][0][0] for tid in range(result.model.num_topics)
    }
    assert sorted(top1.values()) == ["battle", "love", "robot"]

    expected = {"Sci-Fi": "robot", "Romance": "love", "War": "battle"}
    for p in result.profiles:
        assert top1[p.dominant_topic] == expected[p.genre]

    np.testing.assert_allclose(result.model.topic_term.sum(axis=1), 1.0, atol=1e-6)
    np.testing.assert_allclose(result.model.doc_topic.sum(axis=1), 1.0, atol=1e-6)


def test_output_tables(exclusive_term_records):
    result = _service().run(exclusive_term_records)

    assert list(result.genre_counts.columns) == ["genre", "count"]
    assert result.genre_counts["count"].sum() == len(exclusive_term_records)
    assert list(result.topic_terms.columns) == ["topic_id", "rank", "term", "weight"]
    # vocabulary has 3 terms, so every topic lists all 3
    assert len(result.topic_terms) == 9
    assert list(result.genre_topics.columns) == [
        "genre",
        "dominant_topic",
        "weight",
        "topic_0",
        "topic_1",
        "topic_2",
    ]
    assert list(result.topic_coordinates.columns) == ["topic_id", "pc1", "pc2"]
    assert len(result.topic_coordinates) == 3
    assert result.projection.explained_variance_ratio.sum() <= 1.0 + 1e-9
    assert set(result.topic_labels["label"]) == {
        result.labels[t] for t in range(3)
    }
    assert set(result.genre_top_terms["term"]) == {"robot", "love", "battle"}


def test_genre_without_terms_is_dropped_and_reported(exclusive_term_records):
    records = exclusive_term_records + [("m7", "the and of it")]
    result = _service().run(records)

    assert "Other" in set(result.genre_counts["genre"])
    assert "Other" not in result.matrix.row_ids
    assert "Other" not in set(result.genre_topics["genre"])
    assert result.matrix.dropped_rows == ("Other",)
    assert any("zero total terms" in w for w in result.warnings)


def test_more_topics_than_genres_is_surfaced(exclusive_term_records):
    result = _service(topic_model={"num_topics": 6}).run(exclusive_term_records)
    assert result.model.num_topics == 6
    assert any("under-determined" in w for w in result.warnings)
    assert len(result.genre_topics) == 3


def test_explicit_labels_are_used(exclusive_term_records):
    result = _service().run(exclusive_term_records, label_map={0: "First"})
    assert result.labels[0] == "First"


def test_document_granularity_averages_per_genre(exclusive_term_records):
    service = _service(term_matrix={"granularity": "document"})
    result = service.run(exclusive_term_records)

    assert result.matrix.n_rows == len(exclusive_term_records)
    assert [p.genre for p in result.profiles] == ["Romance", "Sci-Fi", "War"]
    for p in result.profiles:
        assert p.weights.sum() == pytest.approx(1.0)


def test_document_rows_with_shared_ids_keep_their_genres():
    records = [
        ("Dune", "robot robot robot"),
        ("Dune", "love love love"),
        ("m5", "battle battle"),
    ]
    result = _service(term_matrix={"granularity": "document"}).run(records)

    assert result.matrix.row_ids == ("Dune", "Dune", "m5")
    assert result.matrix.row_genres == ("Sci-Fi", "Romance", "War")
    assert [p.genre for p in result.profiles] == ["Romance", "Sci-Fi", "War"]


def test_empty_rows_from_a_custom_builder_are_dropped(
    make_matrix, exclusive_term_records
):
    fixed = make_matrix(
        [[0, 3, 0], [0, 0, 3], [3, 0, 0], [0, 0, 0]],
        ["Romance", "Sci-Fi", "War", "Other"],
        ["battle", "love", "robot"],
    )
    service = _service()
    service.matrix_builder = _FixedMatrixBuilder(fixed)
    result = service.run(exclusive_term_records)

    assert result.matrix.row_ids == ("Romance", "Sci-Fi", "War")
    assert result.matrix.dropped_rows == ("Other",)
    assert any("zero total terms" in w for w in result.warnings)
    assert "Other" not in set(result.genre_topics["genre"])


def test_estimated_topic_count(exclusive_term_records):
    cfg = PipelineConfig(
        topic_model=TopicModelConfig(max_iter=30),
        estimation=TopicEstimationConfig(min_k=2, max_k=3),
        estimate_k=True,
    )
    result = GenreTopicService.from_config(cfg).run(exclusive_term_records)
    assert result.model.num_topics in (2, 3)


def test_empty_corpus_names_failing_stage():
    with pytest.raises(EmptyCorpusError) as exc:
        _service().run([])
    assert exc.value.stage == "classification"


def test_stopword_only_corpus_names_failing_stage():
    with pytest.raises(EmptyVocabularyError) as exc:
        _service().run([("a", "the and of"), ("b", "")])
    assert exc.value.stage == "term_matrix"
    assert exc.value.to_dict()["code"] == "EMPTY_VOCABULARY"


def test_malformed_texts_do_not_abort(exclusive_term_records):
    records = exclusive_term_records + [("x1", None), ("x2", "12 ?? !!")]
    result = GenreTopicService.from_config(
        PipelineConfig(
            topic_model=TopicModelConfig(num_topics=3),
            term_matrix=TermMatrixConfig(),
        )
    ).run(records)
    genres = {d.doc_id: d.genre for d in result.documents}
    assert genres["x1"] == "Other"
    assert genres["x2"] == "Other"
