"""
Feature parser
Segments Gherkin feature files into scenario records (tags, name, steps)
"""

import re
from functools import reduce
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass, field

from feature2docx.utils.logger import setup_logger

logger = setup_logger(__name__)

LINE_BREAK = re.compile(r"\r?\n")
SCENARIO_HEADERS = ('scenario:', 'scenario outline:')
FEATURE_EXTENSION = '.feature'


@dataclass(frozen=True)
class ScenarioRecord:
    tags: str
    name: str
    steps: Tuple[str, ...]

    @property
    def tag_list(self) -> List[str]:
        return self.tags.split()

    @property
    def steps_text(self) -> str:
        return '\n'.join(self.steps)


@dataclass
class _ParseState:
    """Parser state for one extraction pass, threaded through the fold.

    A fresh instance is created by every extract_scenarios call and updated in
    place by _advance, so a pass stays linear in the number of lines and no
    state is shared between calls.
    """
    records: List[ScenarioRecord] = field(default_factory=list)
    tags: str = ""
    name: str = ""
    steps: List[str] = field(default_factory=list)
    in_scenario: bool = False

    def finalize(self) -> '_ParseState':
        """Emit the pending scenario if it has a name and at least one step"""
        if self.name and self.steps:
            self.records.append(ScenarioRecord(tags=self.tags, name=self.name, steps=tuple(self.steps)))
        return self


def _is_scenario_header(line: str) -> bool:
    return line.lower().startswith(SCENARIO_HEADERS)


def _advance(state: _ParseState, line: str) -> _ParseState:
    """Apply one line to the state and return it"""
    stripped = line.strip()

    # Blank lines and comments never touch the state
    if not stripped or stripped.startswith('#'):
        return state

    if stripped.startswith('@'):
        if state.in_scenario:
            state.finalize()
            state.name = ""
            state.steps = []
            state.in_scenario = False
        state.tags = stripped
    elif _is_scenario_header(stripped):
        state.finalize()
        state.in_scenario = True
        state.steps = []
        state.name = stripped.split(':', 1)[1].strip()
    elif state.in_scenario:
        state.steps.append(stripped)

    return state


def extract_scenarios(text: str) -> List[ScenarioRecord]:
    """Extract scenario records from feature file text.

    Tags are not reset after a scenario consumes them, so a tag line applies
    to every following scenario until the next tag line. Headers without any
    step lines are dropped. Never raises.
    """
    final_state = reduce(_advance, LINE_BREAK.split(text), _ParseState()).finalize()
    return final_state.records


def feature_title(filename: str) -> str:
    """Document title for a feature file: base name without the .feature extension"""
    base_name = Path(filename.replace('\\', '/')).name
    if base_name.lower().endswith(FEATURE_EXTENSION):
        return base_name[:-len(FEATURE_EXTENSION)]
    return base_name


class FeatureParser:
    """Read feature files from disk and extract their scenarios"""

    def __init__(self, features_dir: str = "."):
        self.features_dir = Path(features_dir)

    def parse_file(self, file_path) -> List[ScenarioRecord]:
        """Parse a single feature file"""
        path = Path(file_path)
        if not path.exists():
            path = self.features_dir / path

        text = path.read_text(encoding="utf-8-sig")
        records = extract_scenarios(text)
        logger.debug(f"Parsed {len(records)} scenarios from {path}")
        return records

    @staticmethod
    def filter_by_tags(records: Iterable[ScenarioRecord],
                       tags: Optional[Iterable[str]] = None) -> List[ScenarioRecord]:
        """Keep records carrying any of the given tags"""
        wanted = [tag if tag.startswith('@') else f'@{tag}' for tag in (tags or [])]
        if not wanted:
            return list(records)
        return [record for record in records if any(tag in record.tag_list for tag in wanted)]
