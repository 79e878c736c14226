"""Sample question banks bundled with the service (``data/samples/*.txt``)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import config
from qbank import ParseResult, parse

logger = logging.getLogger(__name__)


class SampleLibrary:
    _samples: Dict[str, ParseResult] = {}

    @classmethod
    def load(cls) -> Dict[str, ParseResult]:
        if not cls._samples:
            cls.reload()
        return cls._samples

    @classmethod
    def reload(cls, directory: Optional[Path] = None) -> int:
        directory = directory or config.SAMPLES_DIR
        samples: Dict[str, ParseResult] = {}

        if directory.exists():
            for p in sorted(directory.glob("*.txt")):
                try:
                    text = p.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError):
                    logger.warning("skipping unreadable sample %s", p.name)
                    continue
                result = parse(text)
                if result.log:
                    logger.info("sample %s parsed with %d diagnostics", p.stem, len(result.log))
                samples[p.stem] = result
        else:
            logger.warning("samples directory %s does not exist", directory)

        cls._samples = samples
        return len(cls._samples)


# Public API
def get_samples() -> Dict[str, ParseResult]:
    return SampleLibrary.load()


def get_sample(name: str) -> Optional[ParseResult]:
    return SampleLibrary.load().get(name)


def reload_samples() -> int:
    return SampleLibrary.reload()
