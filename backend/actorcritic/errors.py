"""Exceptions raised by the actor-critic engine."""

from network import LinkNotFoundError


class ActorCriticError(Exception):
    """Base class for actor-critic engine errors."""


class TopologyError(ActorCriticError, ValueError):
    """Invalid unit counts or a composite whose children do not match the layout."""


__all__ = ['ActorCriticError', 'TopologyError', 'LinkNotFoundError']
