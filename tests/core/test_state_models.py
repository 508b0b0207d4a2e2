"""Tests for extraction models."""

import pytest
from pydantic import ValidationError

from hother.untangle.core.models import BlockTermination, DocumentBlock, ExtractionState, ExtractionStatus, SignatureEntry


class TestSignatureEntry:
    """Test SignatureEntry model."""

    def test_cells(self):
        """Test row cells order."""
        entry = SignatureEntry(name="repeat", separator="::", type_expression=" String -> Int -> String")
        assert entry.cells() == ("repeat", "::", " String -> Int -> String")

    def test_defaults(self):
        """Test unnamed entry defaults."""
        entry = SignatureEntry(type_expression="Int")
        assert entry.name == ""
        assert entry.separator == "::"


class TestDocumentBlock:
    """Test DocumentBlock model."""

    def test_text_and_log_context(self):
        """Test joined text and log context."""
        block = DocumentBlock(index=3, termination=BlockTermination.NAMED_FUNCTION, heading="## f()", lines=("## f()", "Doc."))
        assert block.text == "## f()\nDoc."
        context = block.log_context()
        assert context["block_index"] == 3
        assert context["termination"] == "named_function"
        assert context["line_count"] == 2

    def test_negative_index_rejected(self):
        """Test index validation."""
        with pytest.raises(ValidationError):
            DocumentBlock(index=-1, termination=BlockTermination.BLANK_LINE)


class TestExtractionState:
    """Test ExtractionState model."""

    def test_initial_state(self):
        """Test initial state is primed for a leading comment block."""
        state = ExtractionState()
        assert state.status == ExtractionStatus.IN_BLOCK
        assert state.in_block is True
        assert state.depth == 1
        assert state.document_lines == 0
        assert state.block == ()
        assert state.has_pending_content is False

    def test_state_description(self):
        """Test human-readable state description."""
        state = ExtractionState(block=("a", "b"), signatures=(SignatureEntry(type_expression="Int"),))
        assert state.current_state_description == "in_block_2_lines_1_signatures"
        assert state.has_pending_content is True

        scanning = ExtractionState(status=ExtractionStatus.OUT_OF_BLOCK)
        assert scanning.current_state_description == "scanning_for_comments"

    def test_frozen(self):
        """Test that snapshots are immutable."""
        state = ExtractionState()
        with pytest.raises(ValidationError):
            state.depth = 3

    def test_depth_must_be_positive(self):
        """Test depth validation."""
        with pytest.raises(ValidationError):
            ExtractionState(depth=0)

    def test_log_context(self):
        """Test log context generation."""
        state = ExtractionState(document_lines=3, flushed_blocks=2, processed_lines=7)
        context = state.log_context()
        assert context["document_lines"] == 3
        assert context["flushed_blocks"] == 2
        assert context["processed_lines"] == 7

    def test_block_sequence(self):
        """Test that appending keeps earlier snapshots unchanged."""
        first = ExtractionState(block=("a",))
        second = first.with_line("b")
        third = first.with_line("c")

        assert first.block == ("a",)
        assert second.block == ("a", "b")
        assert third.block == ("a", "c")
        assert second.block_size == 2

    def test_signature_sequence(self):
        """Test pending signatures as an appended sequence."""
        entry = SignatureEntry(name="f", type_expression="Int")
        state = ExtractionState().with_signature(entry).with_signature(entry)
        assert state.signatures == (entry, entry)
        assert state.signature_count == 2
        assert state.has_pending_content is True
