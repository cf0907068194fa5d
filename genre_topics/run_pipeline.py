import argparse
import logging
import sys
import time

import yaml

from genre_topics.core.config import settings
from genre_topics.data_loader import load_records
from genre_topics.services.pipeline_config import PipelineConfig
from genre_topics.services.pipeline_service import GenreTopicService
from genre_topics.utils.exceptions import PipelineError
from genre_topics.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Genre classification and topic modeling over plot summaries"
    )
    parser.add_argument("file_input", type=str, help="CSV file with plot summaries")
    parser.add_argument("--config", type=str, default=None, help="YAML overrides")
    parser.add_argument("--text-column", type=str, default="Plot")
    parser.add_argument("--id-column", type=str, default=None)
    parser.add_argument(
        "--num-topics", type=int, default=None, help="Number of LDA topics"
    )
    return parser.parse_args(argv)


def build_config(args) -> PipelineConfig:
    cfg = PipelineConfig.from_settings(settings)
    if args.config:
        with open(args.config, "r") as file:
            cfg = cfg.with_overrides(yaml.safe_load(file) or {})
    if args.num_topics is not None:
        cfg = cfg.with_overrides(
            {"topic_model": {"num_topics": args.num_topics}, "estimate_k": False}
        )
    return cfg


def main(argv=None) -> int:
    setup_logging()
    args = parse_args(argv)
    start_time = time.time()
    try:
        cfg = build_config(args)
        records = load_records(
            args.file_input, text_column=args.text_column, id_column=args.id_column
        )
        result = GenreTopicService.from_config(cfg).run(records)
    except PipelineError as e:
        logger.error("Pipeline failed: %s", e.to_dict())
        return 1

    for title, table in (
        ("Genre counts", result.genre_counts),
        ("Topic terms", result.topic_terms),
        ("Topic labels", result.topic_labels),
        ("Genre dominant topics", result.genre_topics),
        ("Topic coordinates", result.topic_coordinates),
    ):
        print(f"\n== {title} ==")
        print(table.to_string(index=False))
    print(
        "\nExplained variance ratio:",
        [round(float(v), 4) for v in result.projection.explained_variance_ratio],
    )
    for w in result.warnings:
        logger.warning(w)
    logger.info(f"✅ Pipeline completed in {time.time() - start_time:.2f} seconds.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
