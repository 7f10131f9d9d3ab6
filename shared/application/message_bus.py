"""
Message Bus

Central hub for routing commands and events to their handlers.
Commands come from the HTTP layer; events come from aggregates after
their changes have been persisted.
"""

from typing import Any, Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Message bus for commands and events

    Commands: One handler per command (1:1)
    Events: Multiple handlers per event (1:N)
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}
        self._command_handlers: Dict[Type, Callable[[Any], Any]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """
        Register an event handler

        Multiple handlers can be registered for the same event type.
        Registering the same handler twice is a no-op, so app ``ready()``
        hooks may run more than once.
        """
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Registered event handler %s for %s", _name(handler), event_type.__name__)

    def register_command_handler(self, command_type: Type, handler: Callable[[Any], Any]):
        """
        Register a command handler

        Only one handler can be registered per command type.
        """
        existing = self._command_handlers.get(command_type)
        if existing is not None and existing is not handler:
            raise ValueError(
                f"Handler for {command_type.__name__} is already registered. "
                "Commands can have only one handler."
            )
        self._command_handlers[command_type] = handler
        logger.debug("Registered command handler for %s", command_type.__name__)

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def handle_command(self, command: Any) -> Any:
        """
        Handle a command

        Returns whatever the command handler returns (a Result for the
        reservation commands). Raises ValueError if no handler is registered.
        """
        command_type = type(command)
        handler = self._command_handlers.get(command_type)

        if not handler:
            raise ValueError(
                f"No handler registered for command {command_type.__name__}"
            )

        logger.info("Handling command: %s", command_type.__name__)
        try:
            return handler(command)
        except Exception:
            logger.error("Error handling command %s", command_type.__name__, exc_info=True)
            raise

    def publish_events(self, events: Iterable[DomainEvent]) -> int:
        """
        Publish domain events

        All registered handlers for each event type will be called.
        Errors in handlers are logged but don't stop other handlers.
        Returns the number of handler invocations that failed.
        """
        failures = 0
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.debug("No handlers registered for event %s", event_type.__name__)
                continue

            logger.info("Publishing event: %s (ID: %s)", event_type.__name__, event.event_id)

            for handler in list(handlers):
                try:
                    handler(event)
                except Exception:
                    failures += 1
                    logger.error(
                        "Error in event handler %s for event %s",
                        _name(handler),
                        event_type.__name__,
                        exc_info=True,
                    )
                    # other handlers still run
        return failures


def _name(handler) -> str:
    return getattr(handler, '__qualname__', repr(handler))


# Application-wide bus; apps register their handlers in AppConfig.ready()
message_bus = MessageBus()
