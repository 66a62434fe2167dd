"""Unit tests for loading alignment descriptions."""

import json

import pytest

from alignviz.models import LinkKeyInfo, LinkType, NodeType
from alignviz.services.graph_loader import (
    AlignmentPayload,
    GraphFormatError,
    load_alignment,
    load_alignment_file,
)


class TestLoadAlignment:
    """Tests for load_alignment."""

    def test_builds_worksheet_and_graph(self, person_payload):
        snapshot = load_alignment(person_payload)

        assert snapshot.workspace_id == "WSP1"
        assert snapshot.worksheet.id == "WS1"
        assert snapshot.worksheet.get_header_visible_leaf_nodes() == ["HN1", "HN2", "HN3"]
        assert snapshot.worksheet.headers.get_header("HN3").column_name == "notes"
        assert snapshot.graph.node_count == 3
        assert snapshot.graph.link_count == 3

    def test_column_nodes(self, person_payload):
        snapshot = load_alignment(person_payload)

        column = snapshot.graph.get_node("CN1")
        assert column.node_type == NodeType.COLUMN_NODE
        assert column.hnode_id == "HN1"
        assert column.local_label == "name"

    def test_link_fields(self, person_payload):
        snapshot = load_alignment(person_payload)
        links = {l.id: l for l in snapshot.graph.links()}

        assert links["L1"].label.local_name == "name"
        assert links["L1"].key_info == LinkKeyInfo.PART_OF_KEY
        assert links["L1"].link_type == LinkType.NONE
        assert links["L3"].link_type == LinkType.DATA_PROPERTY_OF_COLUMN_LINK
        assert links["L3"].specialized_link_id == "L2"

    def test_explicit_local_name(self, person_payload):
        person_payload["links"][0]["label"]["localName"] = "fullName"
        snapshot = load_alignment(person_payload)

        link = next(l for l in snapshot.graph.links() if l.id == "L1")
        assert link.label.local_name == "fullName"

    def test_node_label_defaults_to_uri_fragment(self, person_payload):
        person_payload["nodes"][0]["label"] = ""
        snapshot = load_alignment(person_payload)

        assert snapshot.graph.get_node("Person1").local_label == "Person"

    def test_visible_headers_order(self, person_payload):
        person_payload["visibleHeaders"] = ["HN3", "HN1"]
        snapshot = load_alignment(person_payload)

        assert snapshot.worksheet.get_header_visible_leaf_nodes() == ["HN3", "HN1"]

    def test_accepts_payload_model(self, person_payload):
        payload = AlignmentPayload.model_validate(person_payload)
        assert load_alignment(payload).worksheet.id == "WS1"

    def test_empty_graph(self):
        snapshot = load_alignment({"workspaceId": "WSP1", "worksheetId": "WS1"})

        assert snapshot.graph.is_empty()
        assert snapshot.worksheet.visible_header_ids == []


class TestMalformedInput:
    """Tests for GraphFormatError."""

    def test_missing_worksheet_id(self):
        with pytest.raises(GraphFormatError, match="Invalid alignment description"):
            load_alignment({"workspaceId": "WSP1"})

    def test_unknown_node_type(self, person_payload):
        person_payload["nodes"][0]["type"] = "Banana"
        with pytest.raises(GraphFormatError):
            load_alignment(person_payload)

    def test_column_node_without_header(self, person_payload):
        del person_payload["nodes"][1]["hNodeId"]
        with pytest.raises(GraphFormatError, match="CN1 has no hNodeId"):
            load_alignment(person_payload)

    def test_specialization_without_reference(self, person_payload):
        del person_payload["links"][2]["specializedLinkId"]
        with pytest.raises(GraphFormatError, match="specializedLinkId"):
            load_alignment(person_payload)

    def test_link_to_unknown_node(self, person_payload):
        person_payload["links"][0]["target"] = "Nowhere"
        with pytest.raises(GraphFormatError, match="Nowhere"):
            load_alignment(person_payload)

    def test_duplicate_node_id(self, person_payload):
        person_payload["nodes"].append({"id": "Person1"})
        with pytest.raises(GraphFormatError, match="Duplicate node id"):
            load_alignment(person_payload)

    def test_duplicate_link_id(self, person_payload):
        person_payload["links"].append(dict(person_payload["links"][0]))
        with pytest.raises(GraphFormatError, match="Duplicate link id"):
            load_alignment(person_payload)

    def test_undeclared_visible_header(self, person_payload):
        person_payload["visibleHeaders"] = ["HN1", "HN9"]
        with pytest.raises(GraphFormatError, match="HN9"):
            load_alignment(person_payload)


class TestLoadAlignmentFile:
    """Tests for load_alignment_file."""

    def test_reads_json_file(self, tmp_path, person_payload):
        path = tmp_path / "alignment.json"
        path.write_text(json.dumps(person_payload))

        assert load_alignment_file(path).graph.node_count == 3

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "alignment.json"
        path.write_text("{not json")

        with pytest.raises(GraphFormatError, match="JSON decode error"):
            load_alignment_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphFormatError, match="Error reading"):
            load_alignment_file(tmp_path / "missing.json")

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "alignment.json"
        path.write_text("[]")

        with pytest.raises(GraphFormatError, match="Expected a JSON object"):
            load_alignment_file(path)
