"""Pytest configuration and fixtures."""

import logging
import sys
from collections.abc import AsyncGenerator
from typing import Any, Optional

import pytest
import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient

from alignviz.api.main import app
from alignviz.config import Settings, get_settings
from alignviz.models import (
    AlignmentGraph,
    HeaderNode,
    HeaderTable,
    Label,
    Link,
    LinkKeyInfo,
    LinkType,
    Node,
    NodeType,
    Worksheet,
)

RDF = "http://example.org/ontology#"


def get_test_settings() -> Settings:
    """Override settings for testing."""
    return Settings(
        environment="test",
        log_level="WARNING",
        deterministic_ordering=False,
    )


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep structlog output out of captured command output."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    app.dependency_overrides[get_settings] = get_test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Alignment fixtures
# ---------------------------------------------------------------------------


def make_worksheet(*headers: tuple[str, str], worksheet_id: str = "WS1") -> Worksheet:
    """Build a worksheet whose visible headers are the given (id, name) pairs."""
    table = HeaderTable.from_headers(HeaderNode(id=h, column_name=name) for h, name in headers)
    return Worksheet(id=worksheet_id, headers=table, visible_header_ids=[h for h, _ in headers])


def class_node(node_id: str, label: str = "", forced: bool = False) -> Node:
    return Node(
        id=node_id,
        local_label=label or node_id,
        domain_uri=f"{RDF}{label or node_id}",
        is_forced=forced,
        node_type=NodeType.INTERNAL_NODE,
    )


def property_link(
    link_id: str,
    source: str,
    target: str,
    name: str = "hasValue",
    link_type: LinkType = LinkType.NONE,
    key_info: LinkKeyInfo = LinkKeyInfo.NONE,
    specialized_link_id: Optional[str] = None,
) -> Link:
    return Link(
        id=link_id,
        source_id=source,
        target_id=target,
        label=Label(uri=f"{RDF}{name}", local_name=name),
        link_type=link_type,
        key_info=key_info,
        specialized_link_id=specialized_link_id,
    )


@pytest.fixture
def person_graph() -> AlignmentGraph:
    """Person -> name (key), Person -> age, Person -worksFor-> Organization -> orgName.

    Column CN4 is bound to a header that is not visible.
    """
    graph = AlignmentGraph()
    graph.add_node(class_node("Person1", "Person"))
    graph.add_node(class_node("Organization1", "Organization", forced=True))
    graph.add_node(Node.column("CN1", hnode_id="HN1", column_name="name"))
    graph.add_node(Node.column("CN2", hnode_id="HN2", column_name="age"))
    graph.add_node(Node.column("CN3", hnode_id="HN3", column_name="employer"))
    graph.add_node(Node.column("CN4", hnode_id="HN_HIDDEN", column_name="hidden"))

    graph.add_link(property_link("L1", "Person1", "CN1", "name", key_info=LinkKeyInfo.PART_OF_KEY))
    graph.add_link(property_link("L2", "Person1", "CN2", "age", link_type=LinkType.DATA_PROPERTY_LINK))
    graph.add_link(
        property_link("L3", "Person1", "Organization1", "worksFor", link_type=LinkType.OBJECT_PROPERTY_LINK)
    )
    graph.add_link(property_link("L4", "Organization1", "CN3", "orgName"))
    graph.add_link(property_link("L5", "Organization1", "CN4", "hiddenValue"))
    return graph


@pytest.fixture
def person_worksheet() -> Worksheet:
    return make_worksheet(("HN1", "name"), ("HN2", "age"), ("HN3", "employer"), ("HN5", "notes"))


@pytest.fixture
def person_payload() -> dict[str, Any]:
    """JSON description of a small alignment, as posted to the API."""
    return {
        "workspaceId": "WSP1",
        "worksheetId": "WS1",
        "headers": [
            {"id": "HN1", "columnName": "name"},
            {"id": "HN2", "columnName": "age"},
            {"id": "HN3", "columnName": "notes"},
        ],
        "nodes": [
            {"id": "Person1", "label": "Person", "uri": f"{RDF}Person"},
            {"id": "CN1", "type": "ColumnNode", "hNodeId": "HN1", "columnName": "name"},
            {"id": "CN2", "type": "ColumnNode", "hNodeId": "HN2", "columnName": "age"},
        ],
        "links": [
            {
                "id": "L1",
                "source": "Person1",
                "target": "CN1",
                "label": {"uri": f"{RDF}name"},
                "keyInfo": "PartOfKey",
            },
            {
                "id": "L2",
                "source": "Person1",
                "target": "CN2",
                "label": {"uri": f"{RDF}age"},
                "type": "DataPropertyLink",
            },
            {
                "id": "L3",
                "source": "Person1",
                "target": "CN2",
                "label": {"uri": f"{RDF}ageRefined"},
                "type": "DataPropertyOfColumnLink",
                "specializedLinkId": "L2",
            },
        ],
    }
