class RkExplorerError(Exception):
    """Base exception for all rk_explorer errors"""
    pass


class ConfigError(RkExplorerError):
    """Invalid or inconsistent global.json or tableau config"""
    pass


class TableauDefinitionError(ConfigError):
    """
    A tableau definition whose coefficient arrays do not line up:
    non-square matrix, weights/nodes of the wrong length, etc
    """
    pass


class RegistryUnavailable(RkExplorerError):
    """The tableau registry could not deliver its collection"""
    pass


class DuplicateTableauId(RkExplorerError):
    """A tableau with the same id is already registered"""
    pass


class TableauLookupError(RkExplorerError, LookupError):
    """Base for id lookups against the current tableau snapshot"""

    def __init__(self, tableau_id: str, message: str):
        self.tableau_id = tableau_id
        super().__init__(message)


class TableauNotFound(TableauLookupError):
    """No tableau in the snapshot carries the requested id"""

    def __init__(self, tableau_id: str):
        super().__init__(tableau_id, f"Tableau '{tableau_id}' not found")


class AmbiguousTableauId(TableauLookupError):
    """More than one tableau in the snapshot carries the requested id"""

    def __init__(self, tableau_id: str, count: int):
        self.count = count
        super().__init__(tableau_id, f"Tableau id '{tableau_id}' matches {count} tableaus")
