from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from genre_topics.core.topic_summary.base import TopicLabeler, TopicSummary
from genre_topics.core.topic_summary.config import TopicLabelConfig


# --- Default heuristic (top-k keywords), explicit map wins ---
@dataclass
class DefaultHeuristicLabeler(TopicLabeler):
    cfg: TopicLabelConfig

    def label(
        self,
        summary: TopicSummary,
        *,
        explicit_map: Optional[Dict[int, str]] = None,
    ) -> Dict[int, str]:
        explicit_map = explicit_map or {}
        out: Dict[int, str] = {}
        for tid in sorted(summary.topics):
            if tid in explicit_map:
                out[tid] = explicit_map[tid]
                continue
            kw = summary.keywords(tid)[: self.cfg.num_keywords]
            out[tid] = self.cfg.separator.join(kw) if kw else f"Topic {tid}"
        return out
