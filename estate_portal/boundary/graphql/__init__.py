"""GraphQL data API boundary."""

from estate_portal.boundary.graphql.client import DataApiClient

__all__ = ["DataApiClient"]
