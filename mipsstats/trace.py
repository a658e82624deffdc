import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InputUnavailable, MalformedTrace

logger = logging.getLogger(__name__)

ADDR_MASK = (1 << 64) - 1
WORD_MASK = 0xFFFFFFFF

TraceEntry = Tuple[int, int]


def _parse_hex(tok: str, limit: int, what: str, line_no: int) -> int:
    try:
        value = int(tok, 16)
    except ValueError:
        raise MalformedTrace(f"bad {what} {tok!r} (want hex)", line_no) from None
    if value < 0 or value > limit:
        raise MalformedTrace(f"{what} {tok!r} does not fit in {limit.bit_length()} bits", line_no)
    return value

def parse_trace(lines: Iterable[str], max_entries: Optional[int] = None) -> Iterator[TraceEntry]:
    """Yield (addr, word) pairs from trace text, in input order.

    Each non-blank line holds a fetch address and an instruction word, both
    hex with an optional 0x prefix. Anything after '#' is ignored. Duplicate
    entries are kept: repeated addresses are how loops show up in a trace.
    """
    count = 0
    for line_no, line in enumerate(lines, start=1):
        s = line.split('#', 1)[0].strip()
        if not s:
            continue
        parts = s.split()
        if len(parts) != 2:
            raise MalformedTrace(f"expected '<addr> <word>', got {s!r}", line_no)
        addr = _parse_hex(parts[0], ADDR_MASK, "address", line_no)
        word = _parse_hex(parts[1], WORD_MASK, "instruction word", line_no)
        count += 1
        if max_entries is not None and count > max_entries:
            raise MalformedTrace(f"trace longer than {max_entries} entries", line_no)
        yield addr, word

def read_trace(path: str, max_entries: Optional[int] = None) -> List[TraceEntry]:
    """Load a whole trace file into a list of (addr, word) pairs."""
    try:
        with open(path, 'r') as f:
            entries = list(parse_trace(f, max_entries=max_entries))
    except OSError as e:
        raise InputUnavailable(f"cannot read trace {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise MalformedTrace(f"{path} is not a text trace") from e
    logger.info("loaded %d trace entries from %s", len(entries), path)
    return entries
