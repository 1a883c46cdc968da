"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that span repositories and gates; they
    raise typed domain errors and leave transport concerns to the caller.
    """

    pass
