"""Domain exceptions for the category registry."""


class RegistryError(Exception):
    """Base exception for all category registry errors."""
    pass


class CategoryConflict(RegistryError):
    """A category with the same name (ignoring case) already exists."""

    def __init__(self, unit_id: str, finance_type: str, name: str):
        super().__init__(
            f"Category '{name}' already exists for unit {unit_id} ({finance_type})"
        )
        self.unit_id = unit_id
        self.finance_type = finance_type
        self.name = name


class CategoryNotFound(RegistryError):
    """The category to rename is not registered for this unit and type."""
    pass


class InvalidCategoryName(RegistryError):
    """Category name is empty after trimming whitespace."""
    pass
