"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingRequiredFieldError(DomainException):
    """A record was submitted without one of its required fields"""

    def __init__(self, field_name: str):
        super().__init__(f"Missing required field: {field_name}")
        self.field_name = field_name


class InvalidFieldValueError(DomainException):
    """An enumerated field was given a value outside its allowed set"""

    def __init__(self, field_name: str, value):
        super().__init__(f"Invalid value for {field_name}: {value!r}")
        self.field_name = field_name
        self.value = value


class EntityNotFoundError(DomainException):
    """Lookup, update or delete referenced a record that does not exist"""

    def __init__(self, entity_type: str, entity_id):
        super().__init__(f"{entity_type} {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id
