"""Tests for pipeline data types."""
from pathlib import Path

from appx_signer.types import PipelineOutcome, PipelineState, Session


class TestSession:

    def test_package_name_is_last_path_component(self):
        session = Session(Path("/apps/Contoso.Notes_1.0.0.0_x64"), Path("/out"))
        assert session.package_name == "Contoso.Notes_1.0.0.0_x64"

    def test_artifact_paths(self):
        session = Session(Path("/apps/Notes"), Path("/out"))
        assert session.package_file == Path("/out/Notes.appx")
        assert session.private_key_file == Path("/out/Notes.pvk")
        assert session.certificate_file == Path("/out/Notes.cer")
        assert session.pfx_file == Path("/out/Notes.pfx")

    def test_publisher_starts_empty(self):
        assert Session(Path("/apps/Notes"), Path("/out")).publisher == ""


class TestPipelineState:

    def test_terminal_states(self):
        terminal = {s for s in PipelineState if s.is_terminal}
        assert terminal == {PipelineState.SUCCESS, PipelineState.ABORTED}

    def test_outcome_succeeded(self):
        assert PipelineOutcome(PipelineState.SUCCESS).succeeded
        assert not PipelineOutcome(PipelineState.ABORTED, PipelineState.SIGN).succeeded
