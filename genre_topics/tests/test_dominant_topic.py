import numpy as np
import pytest

from genre_topics.core.dominant_topic.resolver import (
    ArgmaxTopicResolver,
    genre_rows_identity,
    genre_rows_mean,
)
from genre_topics.utils.exceptions import PipelineError

resolver = ArgmaxTopicResolver()


def test_ties_go_to_smallest_topic_id():
    doc_topic = np.array([[0.4, 0.4, 0.2], [0.2, 0.4, 0.4], [0.25, 0.25, 0.5]])
    profiles = resolver.resolve(doc_topic, ["A", "B", "C"], "genre")
    assert [(p.genre, p.dominant_topic) for p in profiles] == [
        ("A", 0),
        ("B", 1),
        ("C", 2),
    ]
    assert profiles[0].weight == pytest.approx(0.4)


def test_genre_rows_pass_through_unchanged():
    doc_topic = np.array([[0.7, 0.3], [0.1, 0.9]])
    by_genre = genre_rows_identity(doc_topic, ["War", "Romance"])
    np.testing.assert_array_equal(by_genre["War"], doc_topic[0])
    np.testing.assert_array_equal(by_genre["Romance"], doc_topic[1])

    profiles = resolver.resolve(doc_topic, ["War", "Romance"], "genre")
    assert [p.genre for p in profiles] == ["Romance", "War"]
    np.testing.assert_array_equal(profiles[1].weights, doc_topic[0])


def test_duplicate_genre_rows_are_an_error():
    with pytest.raises(PipelineError) as exc:
        genre_rows_identity(np.eye(2), ["War", "War"])
    assert exc.value.stage == "dominant_topic"


def test_document_rows_are_averaged_per_genre():
    doc_topic = np.array([[0.9, 0.1], [0.3, 0.7], [0.2, 0.8]])
    genres = ["War", "War", "Romance"]
    means = genre_rows_mean(doc_topic, genres)
    np.testing.assert_allclose(means["War"], [0.6, 0.4])
    np.testing.assert_allclose(means["Romance"], [0.2, 0.8])

    profiles = resolver.resolve(doc_topic, genres, "document")
    assert [(p.genre, p.dominant_topic) for p in profiles] == [
        ("Romance", 1),
        ("War", 0),
    ]
    np.testing.assert_allclose(profiles[1].weights.sum(), 1.0)
