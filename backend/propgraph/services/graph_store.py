"""
Graph Store Service (Neo4j)

This module provides the Neo4j-backed record store:
- Filtered record retrieval for search (one parameterized Cypher query)
- Label listing for label browsing
- Record creation and clearing for the seed script

Query construction:
Search filters are passed to Cypher as parameters only. Labels are compared
with list predicates over labels(n) and property keys are read with dynamic
property access (n[key]), so no caller-supplied text is ever interpolated
into the query string.

Requires Neo4j 5.13+ (valueType()).
"""

import logging
import re
from typing import Any, Optional
from contextlib import contextmanager

from neo4j import GraphDatabase, Driver
from neo4j.exceptions import DriverError, Neo4jError
from neo4j.time import Date, DateTime, Duration, Time

from propgraph.config import settings
from propgraph.exceptions import StoreError
from propgraph.models.graph import Record
from propgraph.models.search import SearchFilters

logger = logging.getLogger(__name__)


SEARCH_QUERY = """
MATCH (n)
WHERE ($include_labels IS NULL OR any(label IN labels(n) WHERE label IN $include_labels))
  AND none(label IN labels(n) WHERE label IN $exclude_labels)
  AND all(f IN $property_filters WHERE
      CASE
          WHEN n[f.key] IS NULL THEN false
          WHEN valueType(n[f.key]) STARTS WITH 'LIST' THEN f.value IN n[f.key]
          ELSE n[f.key] = f.value
      END)
RETURN n, labels(n) AS labels, elementId(n) AS element_id
"""

LABELS_QUERY = "CALL db.labels() YIELD label RETURN label"

# Labels are identifiers in CREATE and cannot be parameters
LABEL_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def to_plain_value(value: Any) -> Any:
    """
    Convert a Neo4j property value to a plain Python value.

    Temporal values become datetime/date/time objects (durations become
    ISO-8601 strings); lists are converted element-wise.
    """
    if isinstance(value, (Date, DateTime, Time)):
        return value.to_native()
    if isinstance(value, Duration):
        return value.iso_format()
    if isinstance(value, list):
        return [to_plain_value(item) for item in value]
    return value


class GraphStore:
    """
    Neo4j-based record store.

    This class provides:
    - find_records(): candidate retrieval for the search engine
    - list_labels(): labels present in the database
    - create_record() / clear_all(): data loading for scripts

    Driver failures are logged and re-raised as StoreError.

    Attributes:
        driver: Neo4j driver instance
        database: Name of the Neo4j database to use

    Example:
        >>> store = GraphStore()
        >>> records = store.find_records(SearchFilters(include_labels=("Author",)))
        >>> store.close()
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        database: Optional[str] = None
    ):
        """
        Initialize the graph store with Neo4j connection.

        Args:
            uri: Neo4j connection URI (default: from settings)
            user: Neo4j username (default: from settings)
            password: Neo4j password (default: from settings)
            database: Database name (default: from settings)

        Raises:
            StoreError: If Neo4j cannot be reached
        """
        self._uri = uri or settings.neo4j_uri
        self._user = user or settings.neo4j_user
        self._password = password or settings.neo4j_password
        self.database = database or settings.neo4j_database

        self.driver: Optional[Driver] = None
        self._connect()

    def _connect(self) -> None:
        """Establish connection to Neo4j."""
        try:
            self.driver = GraphDatabase.driver(
                self._uri,
                auth=(self._user, self._password),
                max_connection_lifetime=settings.neo4j_max_connection_lifetime,
                max_connection_pool_size=settings.neo4j_max_connection_pool_size,
                connection_acquisition_timeout=settings.neo4j_connection_acquisition_timeout,
            )
            # Verify connectivity
            self.driver.verify_connectivity()
            logger.info(f"Connected to Neo4j at {self._uri}")
        except (Neo4jError, DriverError) as e:
            logger.error(f"Failed to connect to Neo4j: {e}")
            raise StoreError(f"Failed to connect to Neo4j at {self._uri}: {e}") from e

    @contextmanager
    def _session(self):
        """
        Context manager for Neo4j sessions.

        Driver errors raised inside the block surface as StoreError.

        Yields:
            Neo4j session for executing queries
        """
        session = self.driver.session(database=self.database)
        try:
            yield session
        except (Neo4jError, DriverError) as e:
            logger.error(f"Neo4j query failed: {e}")
            raise StoreError(f"Neo4j query failed: {e}") from e
        finally:
            session.close()

    def close(self) -> None:
        """Close the Neo4j driver connection."""
        if self.driver:
            self.driver.close()
            logger.info("Neo4j connection closed")

    def ping(self) -> bool:
        """Return True if the database answers a connectivity check."""
        try:
            self.driver.verify_connectivity()
            return True
        except (Neo4jError, DriverError) as e:
            logger.warning(f"Neo4j connectivity check failed: {e}")
            return False

    # =========================================================================
    # Search Operations
    # =========================================================================

    @staticmethod
    def build_search_params(filters: SearchFilters) -> dict[str, Any]:
        """
        Build the parameter map for SEARCH_QUERY.

        Args:
            filters: Structural search filters

        Returns:
            Parameters for session.run()
        """
        return {
            "include_labels": list(filters.include_labels) if filters.include_labels is not None else None,
            "exclude_labels": list(filters.exclude_labels),
            "property_filters": [
                {"key": key, "value": value}
                for key, value in filters.property_filters
            ],
        }

    def find_records(self, filters: SearchFilters) -> list[Record]:
        """
        Retrieve every record matching the structural filter.

        Args:
            filters: Include/exclude labels and property filters

        Returns:
            Records in the order Neo4j returned them

        Raises:
            StoreError: If the query fails
        """
        params = self.build_search_params(filters)

        with self._session() as session:
            result = session.run(SEARCH_QUERY, **params)
            records = [self._row_to_record(row) for row in result]

        logger.debug(f"Neo4j returned {len(records)} candidate records")
        return records

    def list_labels(self) -> list[str]:
        """
        Get every label present in the database.

        Returns:
            Label names (nulls dropped)
        """
        with self._session() as session:
            result = session.run(LABELS_QUERY)
            return [row["label"] for row in result if row["label"] is not None]

    def get_node_count(self) -> int:
        """Get total number of nodes in the database."""
        with self._session() as session:
            record = session.run("MATCH (n) RETURN count(n) AS count").single()
            return record["count"] if record else 0

    # =========================================================================
    # Data Loading
    # =========================================================================

    def create_record(self, record: Record) -> str:
        """
        Create a node from a record.

        Args:
            record: Labels and properties of the new node

        Returns:
            Element id of the created node

        Raises:
            ValueError: If a label is not a plain identifier
            StoreError: If the write fails
        """
        for label in record.labels:
            if not LABEL_PATTERN.match(label):
                raise ValueError(f"Invalid label: {label!r}")

        label_clause = "".join(f":`{label}`" for label in record.labels)
        query = f"CREATE (n{label_clause}) SET n = $properties RETURN elementId(n) AS element_id"

        with self._session() as session:
            row = session.run(query, properties=record.properties or {}).single()
            if not row:
                raise StoreError("Failed to create record")
            logger.debug(f"Created record: {row['element_id']}")
            return row["element_id"]

    def clear_all(self) -> None:
        """
        Delete all nodes and relationships from the graph.

        Use with caution - this removes ALL data.
        """
        with self._session() as session:
            session.run("MATCH (n) DETACH DELETE n")
            logger.warning("Cleared all nodes and relationships from graph")

    def _row_to_record(self, row: Any) -> Record:
        """
        Convert a search result row to a Record.

        Args:
            row: Neo4j record with n, labels, element_id

        Returns:
            Record model instance
        """
        node = row["n"]
        properties = {key: to_plain_value(value) for key, value in dict(node).items()}

        return Record(
            labels=list(row["labels"] or []),
            properties=properties,
            element_id=row["element_id"],
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close connection."""
        self.close()
