"""Custom exceptions for the recipe finder agent."""


class RecipeFinderError(Exception):
    """Base exception for recipe finder errors."""

    pass


class AgentStreamError(RecipeFinderError):
    """Raised when the agent query stream fails."""

    pass
