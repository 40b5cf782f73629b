"""Discord Gateway connection: protocol state machine, resume and reconnect."""

from __future__ import annotations

import random
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

import websockets
from websockets.exceptions import ConnectionClosed

from gateway_bridge.state.frame import GatewayFrame
from gateway_bridge.state.events import OutboundEvent
from gateway_bridge.state.session import SessionState
from gateway_bridge.state.reconnect import ReconnectState
from gateway_bridge.state.connection import ConnectionState
from gateway_bridge.state.signals import (
    ReconnectDue,
    SocketClosed,
    SocketOpened,
    ConnectFailed,
    FrameReceived,
    GatewaySignal,
    StopRequested,
    HeartbeatDue,
    HeartbeatStale,
)
from gateway_bridge.config.gateway import (
    OP_HELLO,
    EVENT_READY,
    OP_DISPATCH,
    OP_HEARTBEAT,
    GATEWAY_QUERY,
    EVENT_RESUMED,
    OP_RECONNECT,
    FORWARDED_EVENTS,
    OP_HEARTBEAT_ACK,
    OP_INVALID_SESSION,
    WS_CLOSE_NORMAL_CODE,
    WS_MAX_MESSAGE_BYTES,
    WS_CLOSE_STALE_REASON,
    WS_CLOSE_RESUMABLE_CODE,
    WS_CLOSE_SHUTDOWN_REASON,
    WS_CLOSE_RECONNECT_REASON,
    DEFAULT_DISCORD_GATEWAY_URL,
    INVALID_SESSION_DELAY_MAX_S,
    INVALID_SESSION_DELAY_MIN_S,
    DEFAULT_HEARTBEAT_INTERVAL_MS,
    WS_CLOSE_INVALID_SESSION_REASON,
)

from .codec import build_resume, decode_frame, encode_frame, build_identify, build_heartbeat
from .heartbeat import HeartbeatMonitor
from .scheduler import LoopScheduler

Connector = Callable[[str], Awaitable[Any]]
EventSink = Callable[[OutboundEvent], object]


async def connect_websocket(url: str) -> Any:
    # Keepalive is the Gateway's own heartbeat, not websocket pings.
    return await websockets.connect(url, max_size=WS_MAX_MESSAGE_BYTES, ping_interval=None)


class ConnectionManager:
    """Keeps one Gateway session alive and hands accepted events to ``on_event``.

    All state changes happen in the processing loop (``run`` or
    ``process_pending``). The socket driver task and the timers only post
    signals onto the inbox, so frames are applied strictly in arrival order.

    ``on_event`` is called synchronously for every allow-listed dispatch and is
    expected to return immediately (for example by scheduling an HTTP call as
    its own task). Exceptions it raises are logged and otherwise ignored.
    """

    def __init__(
        self,
        *,
        token: str,
        intents: int,
        on_event: EventSink,
        gateway_url: str = DEFAULT_DISCORD_GATEWAY_URL,
        connector: Connector | None = None,
        scheduler: Any | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._token = token
        self._intents = int(intents)
        self._on_event = on_event
        self._gateway_url = gateway_url
        self._connector = connector or connect_websocket
        self._scheduler = scheduler or LoopScheduler()
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger(__name__)

        self.state = ConnectionState.DISCONNECTED
        self.session = SessionState()
        self.reconnect = ReconnectState()
        self.heartbeat = HeartbeatMonitor(
            self._scheduler,
            on_beat=lambda: self._post(HeartbeatDue(self._socket)),
            on_stale=lambda: self._post(HeartbeatStale(self._socket)),
            rng=self._rng,
            logger=self._logger,
        )

        self._inbox: asyncio.Queue[GatewaySignal] = asyncio.Queue()
        self._socket: Any | None = None
        self._drivers: set[asyncio.Task] = set()
        self._reconnect_timer: Any | None = None
        self._closing: set[asyncio.Task] = set()
        self._stop_requested = False
        self._shut_down = False

        self._signal_handlers: dict[type, Callable[[Any], Awaitable[None]]] = {
            SocketOpened: self._on_socket_opened,
            FrameReceived: self._on_frame,
            SocketClosed: self._on_socket_closed,
            ConnectFailed: self._on_connect_failed,
            HeartbeatDue: self._on_heartbeat_due,
            HeartbeatStale: self._on_heartbeat_stale,
            ReconnectDue: self._on_reconnect_due,
        }
        self._op_handlers: dict[int, Callable[[GatewayFrame], Awaitable[None]]] = {
            OP_DISPATCH: self._handle_dispatch,
            OP_HEARTBEAT: self._handle_heartbeat_request,
            OP_RECONNECT: self._handle_reconnect,
            OP_INVALID_SESSION: self._handle_invalid_session,
            OP_HELLO: self._handle_hello,
            OP_HEARTBEAT_ACK: self._handle_heartbeat_ack,
        }

    @property
    def socket(self) -> Any | None:
        return self._socket

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_timer is not None

    def connect(self) -> None:
        if self._stop_requested:
            return
        self._cancel_reconnect_timer()
        url = self._target_url()
        self.state = ConnectionState.CONNECTING
        self._logger.info("Connecting to %s", url)
        driver = asyncio.create_task(self._drive_socket(url))
        self._drivers.add(driver)
        driver.add_done_callback(self._drivers.discard)

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Connect and process signals until a stop is requested."""
        watcher: asyncio.Task | None = None
        if stop_event is not None:
            watcher = asyncio.create_task(self._watch_stop(stop_event))
        self.connect()
        try:
            while True:
                signal = await self._inbox.get()
                if isinstance(signal, StopRequested):
                    break
                await self.handle_signal(signal)
        finally:
            if watcher is not None:
                watcher.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await watcher
            await self._shutdown()

    async def process_pending(self) -> None:
        """Apply every signal already in the inbox without waiting for more."""
        while not self._inbox.empty():
            signal = self._inbox.get_nowait()
            if isinstance(signal, StopRequested):
                await self._shutdown()
                return
            await self.handle_signal(signal)

    def request_stop(self) -> None:
        if self._stop_requested:
            return
        self._stop_requested = True
        self.state = ConnectionState.CLOSING
        self.heartbeat.stop()
        self._cancel_reconnect_timer()
        self._post(StopRequested())

    async def stop(self) -> None:
        self.request_stop()
        await self._shutdown()

    async def handle_signal(self, signal: GatewaySignal) -> None:
        if self._stop_requested:
            return
        handler = self._signal_handlers.get(type(signal))
        if handler is not None:
            await handler(signal)

    async def _drive_socket(self, url: str) -> None:
        try:
            socket = await self._connector(url)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self._post(ConnectFailed(exc))
            return

        self._post(SocketOpened(socket))
        try:
            async for raw in socket:
                self._post(FrameReceived(socket, raw))
        except ConnectionClosed:
            pass
        except asyncio.CancelledError:
            with contextlib.suppress(Exception):
                await socket.close(code=WS_CLOSE_NORMAL_CODE, reason=WS_CLOSE_SHUTDOWN_REASON)
            raise
        except Exception as exc:
            self._logger.error("WebSocket error: %s", exc)
        self._post(
            SocketClosed(
                socket,
                code=getattr(socket, "close_code", None),
                reason=getattr(socket, "close_reason", None) or "",
            )
        )

    async def _watch_stop(self, stop_event: asyncio.Event) -> None:
        await stop_event.wait()
        self.request_stop()

    def _post(self, signal: GatewaySignal) -> None:
        self._inbox.put_nowait(signal)

    def _target_url(self) -> str:
        if self.session.should_resume and self.session.resume_url:
            return self.session.resume_url.rstrip("/") + GATEWAY_QUERY
        return self._gateway_url

    async def _on_socket_opened(self, signal: SocketOpened) -> None:
        if self.state is not ConnectionState.CONNECTING:
            self._logger.debug("Discarding socket opened outside of a connect attempt")
            self._close_in_background(signal.socket, WS_CLOSE_NORMAL_CODE, WS_CLOSE_SHUTDOWN_REASON)
            return
        self._socket = signal.socket
        self.state = ConnectionState.AWAITING_HELLO
        self._logger.info("WebSocket connected; awaiting HELLO")

    async def _on_frame(self, signal: FrameReceived) -> None:
        if signal.socket is not self._socket:
            return
        try:
            frame = decode_frame(signal.raw)
        except ValueError as exc:
            self._logger.warning("Dropping malformed frame: %s", exc)
            return

        if frame.s is not None:
            self.session.last_sequence = frame.s

        handler = self._op_handlers.get(frame.op)
        if handler is None:
            self._logger.debug("Ignoring frame with unknown op %s", frame.op)
            return
        await handler(frame)

    async def _on_socket_closed(self, signal: SocketClosed) -> None:
        if signal.socket is not self._socket:
            return
        self._logger.warning("WebSocket closed: %s %s", signal.code, signal.reason)
        self._socket = None
        self._on_connection_lost()

    async def _on_connect_failed(self, signal: ConnectFailed) -> None:
        self._logger.error("Connection failed: %s", signal.error)
        self.state = ConnectionState.DISCONNECTED
        self._schedule_backoff()

    async def _on_heartbeat_due(self, signal: HeartbeatDue) -> None:
        if signal.socket is None or signal.socket is not self._socket:
            return
        await self._send(build_heartbeat(self.session.last_sequence))

    async def _on_heartbeat_stale(self, signal: HeartbeatStale) -> None:
        # The connection may already be gone through a close or op 9 queued before this tick.
        if signal.socket is None or signal.socket is not self._socket:
            return
        self._logger.warning("Heartbeat not ACKed, reconnecting...")
        self.session.should_resume = True
        self._retire_socket(WS_CLOSE_RESUMABLE_CODE, WS_CLOSE_STALE_REASON)
        self._on_connection_lost()

    async def _on_reconnect_due(self, _signal: ReconnectDue) -> None:
        self._reconnect_timer = None
        self.connect()

    async def _handle_hello(self, frame: GatewayFrame) -> None:
        data = frame.d if isinstance(frame.d, dict) else {}
        interval = data.get("heartbeat_interval")
        if not isinstance(interval, int) or isinstance(interval, bool) or interval <= 0:
            interval = DEFAULT_HEARTBEAT_INTERVAL_MS
        self._logger.info("Received HELLO, heartbeat interval: %dms", interval)

        self.state = ConnectionState.AUTHENTICATING
        self.heartbeat.start(interval)

        if self.session.can_resume():
            self._logger.info("Sending RESUME")
            await self._send(build_resume(self._token, self.session.session_id, self.session.last_sequence))
        else:
            self._logger.info("Sending IDENTIFY")
            await self._send(build_identify(self._token, self._intents))

    async def _handle_dispatch(self, frame: GatewayFrame) -> None:
        """Consume READY/RESUMED and emit allow-listed events with their raw ``d``.

        RESUMED resets the backoff counter as READY does; both mean the
        connection came back.
        """
        event = frame.t
        if event is None:
            self._logger.debug("Dropping dispatch without an event name")
            return

        if event == EVENT_READY:
            data = frame.d if isinstance(frame.d, dict) else {}
            self.session.session_id = data.get("session_id")
            self.session.resume_url = data.get("resume_gateway_url")
            self.session.should_resume = False
            self.reconnect.reset()
            self.state = ConnectionState.READY
            self._logger.info("READY, session: %s", self.session.session_id)
            return

        if event == EVENT_RESUMED:
            self.session.should_resume = False
            self.reconnect.reset()
            self.state = ConnectionState.READY
            self._logger.info("Session resumed")
            return

        if event in FORWARDED_EVENTS:
            self._emit(OutboundEvent(event_name=event, payload={} if frame.d is None else frame.d))

    async def _handle_heartbeat_request(self, _frame: GatewayFrame) -> None:
        # Out-of-cadence reply; the periodic timer and ack flag are left alone.
        await self._send(build_heartbeat(self.session.last_sequence))

    async def _handle_heartbeat_ack(self, _frame: GatewayFrame) -> None:
        self.heartbeat.ack()

    async def _handle_reconnect(self, _frame: GatewayFrame) -> None:
        self._logger.info("Received RECONNECT")
        self.session.should_resume = True
        self._retire_socket(WS_CLOSE_RESUMABLE_CODE, WS_CLOSE_RECONNECT_REASON)
        self._on_connection_lost()

    async def _handle_invalid_session(self, frame: GatewayFrame) -> None:
        resumable = bool(frame.d)
        self._logger.warning("INVALID_SESSION, resumable: %s", "yes" if resumable else "no")

        if resumable:
            self.session.should_resume = True
        else:
            self.session.invalidate()

        self._retire_socket(
            WS_CLOSE_RESUMABLE_CODE if resumable else WS_CLOSE_NORMAL_CODE,
            WS_CLOSE_INVALID_SESSION_REASON,
        )
        self.state = ConnectionState.DISCONNECTED

        delay = self._rng.uniform(INVALID_SESSION_DELAY_MIN_S, INVALID_SESSION_DELAY_MAX_S)
        self._logger.info("Reconnecting in %.1fs after invalid session", delay)
        self._schedule_reconnect(delay)

    def _emit(self, event: OutboundEvent) -> None:
        try:
            self._on_event(event)
        except Exception:
            self._logger.exception("Event handler failed for %s", event.event_name)

    async def _send(self, frame: GatewayFrame) -> None:
        socket = self._socket
        if socket is None:
            self._logger.debug("Not connected; dropping outbound op %s", frame.op)
            return
        try:
            await socket.send(encode_frame(frame))
        except Exception as exc:
            # The driver reports the close; reconnect happens from there.
            self._logger.warning("WebSocket send failed: %s", exc)

    def _on_connection_lost(self) -> None:
        self.heartbeat.stop()
        self.state = ConnectionState.DISCONNECTED
        if self._stop_requested:
            return
        self.session.should_resume = self.session.session_id is not None
        self._schedule_backoff()

    def _schedule_backoff(self) -> None:
        if self._stop_requested:
            return
        delay = self.reconnect.next_delay()
        self._logger.info("Reconnecting in %gs (attempt %d)", delay, self.reconnect.attempts)
        self._schedule_reconnect(delay)

    def _schedule_reconnect(self, delay_s: float) -> None:
        self._cancel_reconnect_timer()
        self._reconnect_timer = self._scheduler.call_later(delay_s, lambda: self._post(ReconnectDue()))

    def _cancel_reconnect_timer(self) -> None:
        if self._reconnect_timer is not None:
            self._reconnect_timer.cancel()
            self._reconnect_timer = None

    def _retire_socket(self, code: int, reason: str) -> None:
        """Detach the current socket so its later frames and close are ignored."""
        self.heartbeat.stop()
        socket, self._socket = self._socket, None
        if socket is not None:
            self._close_in_background(socket, code, reason)

    def _close_in_background(self, socket: Any, code: int, reason: str) -> None:
        # A close handshake with a dead peer can take seconds; never block the inbox on it.
        task = asyncio.create_task(self._close_socket(socket, code, reason))
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    async def _close_socket(self, socket: Any, code: int, reason: str) -> None:
        try:
            await socket.close(code=code, reason=reason)
        except Exception:
            self._logger.debug("WebSocket close failed", exc_info=True)

    async def _shutdown(self) -> None:
        if self._shut_down:
            return
        self._shut_down = True
        self._stop_requested = True
        self.state = ConnectionState.CLOSING
        self.heartbeat.stop()
        self._cancel_reconnect_timer()

        socket, self._socket = self._socket, None
        if socket is not None:
            await self._close_socket(socket, WS_CLOSE_NORMAL_CODE, WS_CLOSE_SHUTDOWN_REASON)

        for driver in list(self._drivers):
            driver.cancel()
        if self._drivers:
            await asyncio.gather(*self._drivers, return_exceptions=True)

        if self._closing:
            await asyncio.gather(*self._closing, return_exceptions=True)

        self.state = ConnectionState.DISCONNECTED
        self._logger.info("Gateway disconnected")


__all__ = ["ConnectionManager", "connect_websocket"]
