"""Exceptions raised by the imagery access broker."""


class BrokerError(Exception):
    """Base class for all broker errors."""


class IdentifierError(BrokerError):
    """A scene identifier could not be used."""

    def __init__(self, scene_id, message):
        super().__init__(message)
        self.scene_id = scene_id


class InvalidIdentifierError(IdentifierError):
    """The identifier matches no known naming convention."""

    def __init__(self, scene_id):
        super().__init__(scene_id, f"Invalid scene ID: {scene_id}")


class MalformedIdentifierError(IdentifierError):
    """The identifier has a recognized prefix but fails the convention's pattern."""

    def __init__(self, scene_id, convention):
        super().__init__(
            scene_id,
            f"Scene ID {scene_id!r} has a {convention.label} prefix "
            f"but does not match the expected {convention.label} format",
        )
        self.convention = convention


class UnknownDataTypeError(IdentifierError):
    """A Landsat data-type qualifier outside the recognized vocabularies."""

    def __init__(self, scene_id, data_type):
        super().__init__(scene_id, f"Unknown data type {data_type!r} for scene {scene_id}")
        self.data_type = data_type


class CatalogError(BrokerError):
    """Base class for scene catalog errors."""


class CatalogNotReadyError(CatalogError):
    """A catalog lookup was attempted before any refresh succeeded."""

    def __init__(self):
        super().__init__("Scene catalog is not ready yet")


class SceneNotFoundError(CatalogError):
    """The scene is not present in the current catalog snapshot."""

    def __init__(self, scene_id):
        super().__init__(f"Scene not found with ID {scene_id}")
        self.scene_id = scene_id


class CatalogFetchError(CatalogError):
    """The scene list could not be downloaded."""


class CatalogParseError(CatalogError):
    """The scene list could not be decoded or contained a malformed row."""


class PlanetAPIError(BrokerError):
    """The imagery-search API returned an error response."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class TideServiceError(BrokerError):
    """Tide predictions could not be retrieved."""
