import pandas as pd
import pytest

from genre_topics.core.config import Settings
from genre_topics.core.genre_classification.classifier import KeywordGenreClassifier
from genre_topics.data_loader import records_from_frame
from genre_topics.run_pipeline import main
from genre_topics.services.pipeline_config import PipelineConfig
from genre_topics.utils.exceptions import InvalidConfigError, MissingColumnError


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("NUM_TOPICS", "4")
    monkeypatch.setenv("RANDOM_STATE", "7")
    monkeypatch.setenv("GRANULARITY", "document")
    cfg = PipelineConfig.from_settings(Settings())

    assert cfg.topic_model.num_topics == 4
    assert cfg.topic_model.random_state == 7
    assert cfg.term_matrix.granularity == "document"
    assert cfg.estimate_k is False


def test_missing_topic_count_turns_on_estimation():
    cfg = PipelineConfig.from_settings(Settings(NUM_TOPICS=None))
    assert cfg.estimate_k is True


def test_overrides_coerce_rules_and_stopwords():
    cfg = PipelineConfig().with_overrides(
        {
            "genres": {"rules": [{"label": "Sport", "keywords": ["football"]}]},
            "stopwords": {"custom_stopwords": ["movie"]},
            "genre_top_words": 5,
        }
    )
    assert KeywordGenreClassifier(cfg.genres).classify("Football drama") == "Sport"
    assert cfg.stopwords.custom_stopwords == frozenset({"movie"})
    assert cfg.genre_top_words == 5


def test_unknown_override_is_rejected():
    with pytest.raises(InvalidConfigError):
        PipelineConfig().with_overrides({"plotting": {}})
    with pytest.raises(InvalidConfigError) as exc:
        PipelineConfig().with_overrides({"topic_model": {"passes": 3}})
    assert exc.value.stage == "config"


def test_records_from_frame():
    df = pd.DataFrame({"Title": ["A", "B"], "Plot": ["robot wars", None]})
    assert records_from_frame(df, id_column="Title") == [
        ("A", "robot wars"),
        ("B", ""),
    ]
    with pytest.raises(MissingColumnError) as exc:
        records_from_frame(df, text_column="Summary")
    assert exc.value.stage == "ingestion"


def test_cli_runs_end_to_end(tmp_path, capsys):
    csv = tmp_path / "plots.csv"
    pd.DataFrame(
        {
            "Title": ["a", "b", "c", "d"],
            "Plot": [
                "a robot explores a distant planet",
                "two lovers plan a wedding",
                "soldiers hold the line in battle",
                "robots rebel against their makers",
            ],
        }
    ).to_csv(csv, index=False)

    assert main([str(csv), "--id-column", "Title", "--num-topics", "2"]) == 0
    out = capsys.readouterr().out
    assert "Genre counts" in out
    assert "Topic coordinates" in out


def test_cli_reports_missing_column(tmp_path):
    csv = tmp_path / "plots.csv"
    pd.DataFrame({"Summary": ["x"]}).to_csv(csv, index=False)
    assert main([str(csv)]) == 1
