# Path: spec_builder/process/resolution/errors.py
"""
Resolution Errors

Raised for operator events the workflow cannot apply.
Matching problems never raise: they leave the item unresolved.
"""


class ResolutionError(Exception):
    """Base class for resolution workflow errors."""


class WorkflowStateError(ResolutionError):
    """Operator event received in a state that does not accept it."""

    def __init__(self, event: str, state: str):
        self.event = event
        self.state = state
        super().__init__(f"Cannot {event} while workflow is {state}")


class UnknownCatalogueEntryError(ResolutionError):
    """Confirmed catalogue id is not in the workflow's catalogue snapshot."""

    def __init__(self, catalogue_id: str):
        self.catalogue_id = catalogue_id
        super().__init__(f"Unknown catalogue entry: {catalogue_id}")


__all__ = [
    'ResolutionError',
    'WorkflowStateError',
    'UnknownCatalogueEntryError',
]
