"""Recursive character chunker for professional diving passages."""

from divetutor.models.passage import Chunk, Passage

# Paragraph breaks first, then lines, sentences, words, raw characters
DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", "! ", "? ", " ", ""]


def _validate(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    if chunk_overlap < 0:
        raise ValueError("chunk_overlap must be >= 0")
    if chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )


def _merge_splits(
    splits: list[str],
    separator: str,
    chunk_size: int,
    chunk_overlap: int,
) -> list[str]:
    """Greedily pack splits into chunks, carrying a tail of up to chunk_overlap chars.

    Every split must already be at most chunk_size characters long.
    """
    sep_len = len(separator)
    chunks = []
    current: list[str] = []
    total = 0

    for split in splits:
        length = len(split)
        if total + length + (sep_len if current else 0) > chunk_size and current:
            chunk = separator.join(current).strip()
            if chunk:
                chunks.append(chunk)
            # Drop leading pieces until only the overlap tail remains and the next split fits
            while total > chunk_overlap or (
                total > 0 and total + length + (sep_len if current else 0) > chunk_size
            ):
                total -= len(current[0]) + (sep_len if len(current) > 1 else 0)
                current.pop(0)
        current.append(split)
        total += length + (sep_len if len(current) > 1 else 0)

    chunk = separator.join(current).strip()
    if chunk:
        chunks.append(chunk)
    return chunks


def _split_text_recursive(
    text: str,
    chunk_size: int,
    chunk_overlap: int,
    separators: list[str],
) -> list[str]:
    """Split on the first separator present, recursing into oversized pieces."""
    separator = separators[-1]
    remaining: list[str] = []
    for i, candidate in enumerate(separators):
        if candidate == "" or candidate in text:
            separator = candidate
            remaining = separators[i + 1:]
            break

    splits = text.split(separator) if separator else list(text)

    chunks = []
    pending: list[str] = []
    for split in splits:
        if not split:
            continue
        if len(split) <= chunk_size:
            pending.append(split)
            continue
        if pending:
            chunks.extend(_merge_splits(pending, separator, chunk_size, chunk_overlap))
            pending = []
        if remaining:
            chunks.extend(_split_text_recursive(split, chunk_size, chunk_overlap, remaining))
        else:
            # Raw character slicing
            chunks.extend(_merge_splits(list(split), "", chunk_size, chunk_overlap))

    if pending:
        chunks.extend(_merge_splits(pending, separator, chunk_size, chunk_overlap))
    return chunks


def split_text(
    text: str,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    separators: list[str] | None = None,
) -> list[str]:
    """Split text into chunks of at most chunk_size characters.

    Text that already fits is returned whole and untouched. Otherwise the
    text is split recursively: paragraph breaks, then line breaks, sentence
    punctuation, spaces and finally raw characters. Adjacent chunks share up
    to chunk_overlap characters.
    """
    _validate(chunk_size, chunk_overlap)
    if not text or not text.strip():
        return []
    if len(text) <= chunk_size:
        return [text]
    return _split_text_recursive(text, chunk_size, chunk_overlap, separators or DEFAULT_SEPARATORS)


def chunk_passage(
    passage: Passage,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
) -> list[Chunk]:
    """Split a passage into chunks that carry the passage's metadata."""
    return [
        Chunk(
            text=text,
            chunk_index=idx,
            passage_id=passage.id,
            passage_title=passage.title,
            metadata=passage.metadata,
        )
        for idx, text in enumerate(split_text(passage.text, chunk_size, chunk_overlap))
    ]


def chunk_passages(
    passages: list[Passage],
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
) -> list[Chunk]:
    """Chunk every passage, preserving passage order."""
    _validate(chunk_size, chunk_overlap)
    chunks = []
    for passage in passages:
        chunks.extend(chunk_passage(passage, chunk_size, chunk_overlap))
    return chunks
