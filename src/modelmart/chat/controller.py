"""Chat session controller.

Owns one conversation: the message log, the generation config and the
lifecycle of the single outstanding inference request.

    Idle --submit--> AwaitingResponse --(success | failure | cancel)--> Idle
    reset: any state --> Idle with a fresh log

Every dispatched request is tagged with the log's epoch. ``reset`` starts a
new epoch and cancels the outstanding token, and a settlement whose epoch is
no longer current is dropped, so a late answer can never land in a log it
was not asked from.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable
from typing import Any

from ..inference import (
    CancellationToken,
    HistoryEntry,
    InferenceConfig,
    InferenceEndpoint,
    InferenceError,
    InferenceRequest,
    RequestCancelledError,
)
from ..registry import ModelProfile
from .clipboard import ClipboardSink
from .introductions import IntroductionCatalog
from .models import ChatState, ConversationMessage, GenerationConfig, Role

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_FALLBACK = (
    "I apologize, but I encountered an issue generating a response. Please try again."
)
ERROR_MESSAGE = "I encountered an error. Please try again in a moment."

Listener = Callable[["ChatSessionController"], None]


class ChatSessionController:
    """State machine for a single chat conversation.

    Not safe for concurrent use from multiple threads; all calls are
    expected on one event loop.
    """

    def __init__(
        self,
        endpoint: InferenceEndpoint,
        introductions: IntroductionCatalog | None = None,
        clipboard: ClipboardSink | None = None,
    ):
        """Initialize the controller.

        Args:
            endpoint: Where requests are sent
            introductions: Greeting table (fallback-only when omitted)
            clipboard: Sink for ``copy_message``
        """
        self._endpoint = endpoint
        self._introductions = introductions or IntroductionCatalog()
        self._clipboard = clipboard

        self._ids = itertools.count(1)
        self._messages: list[ConversationMessage] = []
        self._introduction_id: str | None = None
        self._profile: ModelProfile | None = None
        self._config: GenerationConfig | None = None
        self._pending = False
        self._epoch = 0
        self._token: CancellationToken | None = None
        self._task: asyncio.Task | None = None
        self._listeners: list[Listener] = []

    # -- observable state -------------------------------------------------

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    @property
    def config(self) -> GenerationConfig:
        if self._config is None:
            raise RuntimeError("Controller is not initialized")
        return self._config

    @property
    def profile(self) -> ModelProfile | None:
        return self._profile

    @property
    def pending_request(self) -> bool:
        return self._pending

    @property
    def state(self) -> ChatState:
        return ChatState.AWAITING_RESPONSE if self._pending else ChatState.IDLE

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def introduction(self) -> ConversationMessage | None:
        return next((m for m in self._messages if m.id == self._introduction_id), None)

    def get_message(self, message_id: str) -> ConversationMessage | None:
        return next((m for m in self._messages if m.id == message_id), None)

    def history(self) -> list[HistoryEntry]:
        """The logical dialogue: settled messages, introduction excluded."""
        return [
            m.to_history_entry()
            for m in self._messages
            if not m.is_pending and m.id != self._introduction_id
        ]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(controller)`` after every state change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- operations -------------------------------------------------------

    def initialize(self, profile: ModelProfile) -> None:
        """Start a conversation with ``profile``: introduction only, default config."""
        self._abandon_request()
        self._profile = profile
        self._config = GenerationConfig.from_profile(profile)
        self._start_log()
        logger.debug("Initialized conversation for %s", profile.id)
        self._notify()

    def reset(self) -> None:
        """Replace the log with a fresh introduction; the config is kept."""
        if self._profile is None:
            raise RuntimeError("Controller is not initialized")
        self._abandon_request()
        self._start_log()
        logger.debug("Conversation reset (epoch %d)", self._epoch)
        self._notify()

    def submit(self, text: str) -> asyncio.Task | None:
        """Send a user message.

        The user message and a pending placeholder are appended before this
        returns; the request itself runs as a task on the current loop. Must
        be called from within a running event loop.

        Returns:
            The dispatch task, or None when the call was a no-op (blank
            text, a request already outstanding, or not initialized)
        """
        message = (text or "").strip()
        if not message or self._pending or self._profile is None:
            logger.debug("Ignoring submit (blank=%s, pending=%s)", not message, self._pending)
            return None

        loop = asyncio.get_running_loop()

        request = InferenceRequest(
            message=message,
            config=InferenceConfig(
                temperature=self.config.temperature,
                top_p=self.config.top_p,
                max_tokens=self.config.max_tokens,
                system_prompt=self._profile.system_prompt,
            ),
            knowledge_context=self._profile.knowledge_context,
            conversation_history=self.history(),
        )

        self._messages.append(self._new_message(Role.USER, message))
        placeholder = self._new_message(Role.ASSISTANT, "", is_pending=True)
        self._messages.append(placeholder)
        self._pending = True
        token = CancellationToken()
        self._token = token
        self._notify()

        self._task = loop.create_task(
            self._dispatch(request, token, self._epoch, placeholder.id)
        )
        return self._task

    def cancel(self) -> bool:
        """Ask the outstanding request to stop. Returns False when idle."""
        if not self._pending or self._token is None:
            return False
        self._token.cancel()
        return True

    def update_config(self, **partial: Any) -> GenerationConfig:
        """Merge fields into the config, clamped to their ranges.

        Raises:
            ValueError: On unknown fields or non-numeric values
        """
        self._config = self.config.merged(**partial)
        self._notify()
        return self._config

    def copy_message(self, message_id: str) -> bool:
        """Copy a message's content to the clipboard sink."""
        message = self.get_message(message_id)
        if message is None or message.is_pending:
            logger.warning("Cannot copy message %s: no such settled message", message_id)
            return False
        if self._clipboard is None:
            logger.warning("Cannot copy message %s: no clipboard configured", message_id)
            return False

        try:
            self._clipboard.copy(message.content)
        except Exception:
            logger.warning("Failed to copy message %s", message_id, exc_info=True)
            return False
        return True

    async def wait_for_response(self) -> None:
        """Wait until the outstanding request (if any) has settled."""
        if self._task is not None:
            await asyncio.shield(self._task)

    # -- internals --------------------------------------------------------

    def _new_message(self, role: Role, content: str, is_pending: bool = False) -> ConversationMessage:
        return ConversationMessage(
            id=str(next(self._ids)),
            role=role,
            content=content,
            is_pending=is_pending,
        )

    def _start_log(self) -> None:
        self._epoch += 1
        intro = self._new_message(Role.ASSISTANT, self._introductions.introduction_for(self._profile))
        self._introduction_id = intro.id
        self._messages = [intro]
        self._pending = False

    def _abandon_request(self) -> None:
        if self._token is not None:
            self._token.cancel()
        self._token = None
        self._task = None

    async def _dispatch(
        self,
        request: InferenceRequest,
        token: CancellationToken,
        epoch: int,
        placeholder_id: str,
    ) -> None:
        try:
            result = await self._endpoint.complete(request, token)
        except RequestCancelledError:
            logger.info("Inference request cancelled")
            self._settle(epoch, placeholder_id, None)
            return
        except asyncio.CancelledError:
            self._settle(epoch, placeholder_id, None)
            raise
        except InferenceError as e:
            logger.warning("Inference request failed: %s", e)
            self._settle(epoch, placeholder_id, ERROR_MESSAGE)
            return
        except Exception:
            logger.exception("Unexpected error during inference request")
            self._settle(epoch, placeholder_id, ERROR_MESSAGE)
            return

        if token.cancelled:
            logger.info("Discarding response for cancelled request")
            self._settle(epoch, placeholder_id, None)
            return

        if result.text:
            content = result.response
        else:
            logger.warning("Inference endpoint returned an empty response")
            content = EMPTY_RESPONSE_FALLBACK
        self._settle(epoch, placeholder_id, content)

    def _settle(self, epoch: int, placeholder_id: str, content: str | None) -> None:
        """Swap the placeholder for the final message (or just drop it)."""
        if epoch != self._epoch:
            logger.debug("Dropping settlement from epoch %d (current %d)", epoch, self._epoch)
            return

        settled = [m for m in self._messages if m.id != placeholder_id]
        if content is not None:
            settled.append(self._new_message(Role.ASSISTANT, content))
        self._messages = settled
        self._pending = False
        self._token = None
        self._task = None
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Chat listener %r failed", listener)
