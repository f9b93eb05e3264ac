"""Unit tests for recursive character chunking."""

import pytest

from divetutor.content.passages import get_passages
from divetutor.ingestion.chunker import chunk_passage, chunk_passages, split_text
from divetutor.models.passage import Passage, PassageMetadata


@pytest.fixture
def short_passage():
    return Passage(
        id="short",
        title="Short Passage",
        text="Visual inspection always comes first.",
        metadata=PassageMetadata(discipline="NDT", category="Inspection"),
    )


class TestSplitText:
    """Test size bounds, overlap and separator preference."""

    def test_short_text_is_single_unchanged_chunk(self):
        text = "Check the gas supply before every dive."
        assert split_text(text, chunk_size=1000, chunk_overlap=200) == [text]

    def test_blank_text_yields_no_chunks(self):
        assert split_text("   \n\n  ", chunk_size=100, chunk_overlap=10) == []

    def test_prefers_paragraph_boundaries(self):
        first = "a" * 80
        second = "b" * 80
        chunks = split_text(f"{first}\n\n{second}", chunk_size=100, chunk_overlap=20)
        assert chunks == [first, second]

    def test_falls_back_to_characters(self):
        chunks = split_text("x" * 250, chunk_size=100, chunk_overlap=20)
        assert [len(c) for c in chunks] == [100, 100, 90]

    def test_adjacent_chunks_overlap(self):
        text = " ".join(f"word{i}" for i in range(100))
        chunks = split_text(text, chunk_size=60, chunk_overlap=20)
        assert len(chunks) > 1
        for previous, current in zip(chunks, chunks[1:]):
            assert current.split()[0] in previous.split()

    def test_chunks_never_exceed_size(self):
        for passage in get_passages():
            for chunk in split_text(passage.text, chunk_size=200, chunk_overlap=50):
                assert 0 < len(chunk) <= 200

    def test_deterministic(self):
        text = get_passages()[0].text
        assert split_text(text, 300, 60) == split_text(text, 300, 60)

    @pytest.mark.parametrize("size,overlap", [(0, 0), (100, 100), (100, 150), (100, -1)])
    def test_rejects_invalid_parameters(self, size, overlap):
        with pytest.raises(ValueError):
            split_text("some text", chunk_size=size, chunk_overlap=overlap)


class TestChunkPassage:
    """Test that chunks carry their source passage's identity and metadata."""

    def test_short_passage_single_chunk(self, short_passage):
        chunks = chunk_passage(short_passage, chunk_size=1000, chunk_overlap=200)
        assert len(chunks) == 1
        assert chunks[0].text == short_passage.text
        assert chunks[0].chunk_index == 0
        assert chunks[0].passage_id == "short"
        assert chunks[0].passage_title == "Short Passage"

    def test_metadata_inherited(self):
        passage = get_passages()[0]
        chunks = chunk_passage(passage, chunk_size=300, chunk_overlap=50)
        assert len(chunks) > 1
        assert all(c.metadata == passage.metadata for c in chunks)
        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))

    def test_all_passages_chunked(self):
        passages = get_passages()
        chunks = chunk_passages(passages, chunk_size=1000, chunk_overlap=200)
        assert {c.passage_id for c in chunks} == {p.id for p in passages}
        assert all(len(c.text) <= 1000 for c in chunks)
