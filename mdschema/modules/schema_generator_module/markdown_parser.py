"""Markdown parser that builds the record tree from headings and property lines.

A heading has the form ``## Name (type)``; the number of ``#`` characters is
its depth. Property lines (``-   Field: value``) attach to the most recent
heading. Parent resolution only looks at the previous heading and its first
two ancestors, so a dedent of more than one level is recovered only when that
short chain happens to land on the right ancestor; when the chain is too short
the previous heading stays the parent. Such cases are logged as warnings.
Headings with no resolvable parent at all (a document opening at ``##``) are
dropped.

Functions:
    parse_markdown(text): Parse a document into a forest of records
    parse_heading(line, line_number): Parse a single heading line
    parse_property(line): Parse a single property line

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from mdschema.constants import HEADING_PATTERN, PROPERTY_PATTERN
from mdschema.exceptions import ParseException
from .records import Record, is_marker

from mdschema.utils.logging_utils import get_module_logger
logger = get_module_logger(__name__)


@dataclass
class ParserState:
    """Cursor and parent links threaded through the line loop.

    ``parents`` maps ``id(record)`` to the record's parent for every record
    attached to the tree; it is discarded once parsing finishes.
    """
    roots: List[Record] = field(default_factory=list)
    parents: Dict[int, Optional[Record]] = field(default_factory=dict)
    previous: Optional[Record] = None
    attached: bool = False

    def parent_of(self, record: Optional[Record]) -> Optional[Record]:
        if record is None:
            return None
        return self.parents.get(id(record))


def parse_markdown(text: str) -> List[Record]:
    """Parse markdown text into an ordered forest of root records.

    Args:
        text: Markdown document

    Returns:
        List of depth-1 records with their children attached

    Raises:
        ParseException: If a heading has no parenthesized type
    """
    state = ParserState()

    for line_number, line in enumerate(text.split("\n"), 1):
        line = line.strip()
        if not line:
            continue

        heading = parse_heading(line, line_number)
        if heading is not None:
            _attach(state, heading, line_number)
            continue

        if state.previous is None:
            continue

        parsed = parse_property(line)
        if parsed is not None:
            name, value = parsed
            state.previous.properties[name] = value

    logger.debug(f"Parsed {len(state.roots)} root records")
    return state.roots


def parse_heading(line: str, line_number: Optional[int] = None) -> Optional[Record]:
    """Parse a trimmed heading line into a fresh record.

    Returns:
        A childless Record, or None if the line is not a heading

    Raises:
        ParseException: If the heading has no parenthesized type
    """
    match = HEADING_PATTERN.match(line)
    if not match:
        return None

    if not match.group("type"):
        raise ParseException(match.group("name").strip(), line_number)

    return Record(
        depth=len(match.group("hashes")),
        name=match.group("name").strip().lower(),
        type=match.group("type").strip().lower(),
    )


def parse_property(line: str) -> Optional[Tuple[str, str]]:
    """Parse a trimmed property line into a normalized (name, value) pair."""
    match = PROPERTY_PATTERN.match(line)
    if not match:
        return None

    name = match.group("property").strip().lower()
    value = match.group("value").strip()
    # Markers must match target identities, which are always lowercase
    if is_marker(value):
        value = value.lower()
    return name, value


def _attach(state: ParserState, record: Record, line_number: int) -> None:
    """Place a freshly parsed heading into the tree and make it the cursor."""
    if record.depth == 1:
        state.roots.append(record)
        state.parents[id(record)] = None
        state.previous = record
        state.attached = True
        return

    previous = state.previous
    parent = _resolve_parent(state, record, line_number)

    if parent is None:
        logger.warning(
            f"Line {line_number}: heading '{record.name}' at depth {record.depth} "
            f"has no resolvable parent and is dropped"
        )
        # Properties that follow still land on this detached record
        state.previous = record
        state.attached = False
        return

    if parent.depth >= record.depth:
        logger.warning(
            f"Line {line_number}: heading '{record.name}' at depth {record.depth} "
            f"resolved to parent '{parent.name}' at depth {parent.depth}"
        )
    elif previous is not None and previous.depth - record.depth > 1:
        logger.warning(
            f"Line {line_number}: dedent from depth {previous.depth} to {record.depth} "
            f"placed '{record.name}' under '{parent.name}'"
        )

    for child in parent.children:
        if child.name == record.name:
            logger.debug(f"Line {line_number}: merging repeated heading '{record.name}'")
            record = child
            break
    else:
        parent.children.append(record)
        state.parents[id(record)] = parent

    state.previous = record
    state.attached = True


def _resolve_parent(state: ParserState, record: Record, line_number: int) -> Optional[Record]:
    """Pick the parent of a non-root heading from the previous heading.

    - same depth as previous: previous's parent
    - shallower than previous: previous's grandparent, or previous itself
      when that chain does not exist
    - deeper than previous: previous
    """
    previous = state.previous
    if previous is None or not state.attached:
        return None

    if record.depth == previous.depth:
        return state.parent_of(previous)

    if record.depth < previous.depth:
        grandparent = state.parent_of(state.parent_of(previous))
        if grandparent is None:
            logger.warning(
                f"Line {line_number}: dedent from depth {previous.depth} to {record.depth} "
                f"has no ancestor two levels above '{previous.name}'; keeping it as parent, "
                f"so '{record.name}' at depth {record.depth} nests under a deeper record "
                f"and breaks the depth ordering"
            )
            return previous
        return grandparent

    return previous
