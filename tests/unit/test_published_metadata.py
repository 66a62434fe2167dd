"""Unit tests for published artifact directories."""

import json

import pytest

from alignviz.config import Settings
from alignviz.models import AlignmentGraph, Node, Worksheet
from alignviz.services.published_metadata import (
    AlignmentVisualizationMetadata,
    AvroMetadata,
    PublishMetadataType,
    PublishPathError,
    get_published_metadata,
)
from alignviz.services.visualization import AlignmentVisualizationUpdate, DocumentEncodingError


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        publish_dir=str(tmp_path / "publish"),
        publish_relative_dir="publish/",
    )


class TestDirectories:
    """Tests for directory resolution."""

    def test_avro_directory(self, settings, tmp_path):
        metadata = AvroMetadata(settings)

        assert metadata.metadata_type == PublishMetadataType.AVRO
        assert metadata.directory() == tmp_path / "publish" / "AVRO"
        assert metadata.relative_directory() == "publish/AVRO/"

    def test_setup_creates_directory(self, settings):
        directory = AvroMetadata(settings).setup()
        assert directory.is_dir()

    def test_lookup_by_type(self, settings):
        metadata = get_published_metadata(PublishMetadataType.ALIGNMENT_VISUALIZATION, settings)
        assert isinstance(metadata, AlignmentVisualizationMetadata)
        assert metadata.relative_directory() == "publish/ALIGNMENT_VISUALIZATION/"


class TestPublish:
    """Tests for publishing visualization documents."""

    def test_publish_writes_document(self, settings, person_graph, person_worksheet):
        update = AlignmentVisualizationUpdate(person_worksheet, person_graph, workspace_id="WSP1")

        path = AlignmentVisualizationMetadata(settings).publish(update)

        assert path.name == "WS1.json"
        assert json.loads(path.read_text())["alignmentId"] == "WSP1:WS1AL"

    def test_publish_encoding_failure_writes_nothing(self, settings):
        graph = AlignmentGraph()
        graph.add_node(Node(id="X", local_label=float("nan")))
        update = AlignmentVisualizationUpdate(Worksheet(id="WS9"), graph, workspace_id="WSP1")
        metadata = AlignmentVisualizationMetadata(settings)

        with pytest.raises(DocumentEncodingError):
            metadata.publish(update)

        assert not (metadata.directory() / "WS9.json").exists()

    def test_publish_honors_indent(self, settings, person_graph, person_worksheet):
        update = AlignmentVisualizationUpdate(person_worksheet, person_graph, workspace_id="WSP1")

        path = AlignmentVisualizationMetadata(settings).publish(update, indent=2)

        assert '\n  "updateType"' in path.read_text()

    @pytest.mark.parametrize("worksheet_id", ["../../escaped", "a/b", "..", ""])
    def test_publish_rejects_path_like_worksheet_ids(self, settings, tmp_path, person_graph, worksheet_id):
        update = AlignmentVisualizationUpdate(Worksheet(id=worksheet_id), person_graph, workspace_id="WSP1")
        metadata = AlignmentVisualizationMetadata(settings)

        with pytest.raises(PublishPathError):
            metadata.publish(update)

        assert not (tmp_path / "escaped.json").exists()
        assert not metadata.directory().exists()
