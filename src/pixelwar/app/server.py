from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Dict, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from ..sim.core.config import AppConfig
from ..sim.core.world import World
from ..sim.types.snapshot import Snapshot
from .combat_log import CombatLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueuedSnapshot:
    tick: int
    payload: str


def snapshot_payload(snapshot: Snapshot) -> Dict[str, Any]:
    return {
        "tick": snapshot.tick,
        "metrics": asdict(snapshot.metrics),
        "pixels": snapshot.pixels,
        "world": asdict(snapshot.world),
        "metadata": asdict(snapshot.metadata),
    }


class SimulationController:
    def __init__(self, config: AppConfig):
        self.config = config
        self.world = World(config.simulation)
        self.combat_log = CombatLog(config.combat_log_limit)
        self.world.add_combat_listener(self.combat_log.record)
        self.broadcast_interval = max(1, config.broadcast_interval)
        self.running = False
        self.tick = 0
        self.speed_multiplier = 1.0
        self.clients: Set[WebSocket] = set()
        self._client_last_sent: Dict[WebSocket, int] = {}
        self._snapshot_queue: deque[QueuedSnapshot] = deque(maxlen=max(1, config.snapshot_queue_limit))
        self._lock = asyncio.Lock()
        self._queue_lock = asyncio.Lock()
        self._loop_task: asyncio.Task | None = None

    @property
    def tick_interval(self) -> float:
        return self.config.simulation.tick_duration_ms / 1000.0 / self.speed_multiplier

    def _ensure_loop(self) -> None:
        if self._loop_task is None or self._loop_task.done():
            self._loop_task = asyncio.create_task(self._loop())

    async def start(self) -> None:
        self._ensure_loop()
        self.running = True
        logger.info("simulation running at tick %d", self.tick)

    async def stop(self) -> None:
        self.running = False
        logger.info("simulation paused at tick %d", self.tick)

    async def toggle(self) -> bool:
        if self.running:
            await self.stop()
        else:
            await self.start()
        return self.running

    async def reset(self) -> None:
        async with self._lock:
            self.world.reset()
            self.combat_log.clear()
            self.tick = 0
        async with self._queue_lock:
            self._snapshot_queue.clear()
        for client in self._client_last_sent:
            self._client_last_sent[client] = -1
        logger.info("simulation reset")
        await self._broadcast_snapshot()

    async def advance(self) -> None:
        async with self._lock:
            self.world.step(self.tick)
            self.tick += 1
        if self.tick % self.broadcast_interval == 0:
            await self._broadcast_snapshot()

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            if not self.running:
                continue
            await self.advance()

    async def acknowledge(self, tick: int) -> None:
        async with self._queue_lock:
            while self._snapshot_queue and self._snapshot_queue[0].tick <= tick:
                self._snapshot_queue.popleft()

    def _serialize_snapshot(self) -> QueuedSnapshot:
        snapshot = self.world.snapshot(self.tick)
        payload = {
            "type": "snapshot",
            "tick": snapshot.tick,
            "payload": snapshot_payload(snapshot),
            "combat_log": self.combat_log.lines(),
        }
        return QueuedSnapshot(tick=snapshot.tick, payload=json.dumps(payload))

    async def _send_pending_snapshots(self, client: WebSocket) -> None:
        last_sent = self._client_last_sent.get(client, -1)
        async with self._queue_lock:
            pending = [item for item in self._snapshot_queue if item.tick > last_sent]
        for item in pending:
            await client.send_text(item.payload)
            last_sent = item.tick
        self._client_last_sent[client] = last_sent

    async def _broadcast_snapshot(self) -> None:
        queued = self._serialize_snapshot()
        async with self._queue_lock:
            # Without clients nothing will ack, so only the newest snapshot is worth keeping.
            if not self.clients:
                self._snapshot_queue.clear()
            self._snapshot_queue.append(queued)
        stale: Set[WebSocket] = set()
        for client in self.clients:
            try:
                await self._send_pending_snapshots(client)
            except WebSocketDisconnect:
                stale.add(client)
        for client in stale:
            self.clients.discard(client)
            self._client_last_sent.pop(client, None)


app = FastAPI(title="Pixelwar Simulation")
controller = SimulationController(AppConfig())


@app.on_event("startup")
async def _startup() -> None:
    # The loop idles until a start or toggle request sets the run flag.
    controller._ensure_loop()


@app.get("/api/status")
async def status() -> JSONResponse:
    snapshot = controller.world.snapshot(controller.tick)
    return JSONResponse(
        {
            "running": controller.running,
            "tick": controller.tick,
            "population": len(controller.world.state.registry),
            "metrics": asdict(snapshot.metrics),
        }
    )


@app.get("/api/snapshot")
async def current_snapshot() -> JSONResponse:
    return JSONResponse(snapshot_payload(controller.world.snapshot(controller.tick)))


@app.get("/api/combat-log")
async def combat_log() -> JSONResponse:
    return JSONResponse({"entries": controller.combat_log.lines()})


@app.get("/api/inspect")
async def inspect_cell(x: int, y: int) -> JSONResponse:
    if not controller.world.state.grid.in_bounds(x, y):
        raise HTTPException(status_code=404, detail="cell outside the grid")
    return JSONResponse({"x": x, "y": y, "gene_code": controller.world.inspect(x, y)})


@app.post("/api/control/start")
async def start_simulation() -> JSONResponse:
    await controller.start()
    return JSONResponse({"running": True})


@app.post("/api/control/stop")
async def stop_simulation() -> JSONResponse:
    await controller.stop()
    return JSONResponse({"running": False})


@app.post("/api/control/toggle")
async def toggle_simulation() -> JSONResponse:
    running = await controller.toggle()
    return JSONResponse({"running": running})


@app.post("/api/control/reset")
async def reset_simulation() -> JSONResponse:
    await controller.reset()
    return JSONResponse({"running": controller.running, "tick": controller.tick})


@app.post("/api/control/speed")
async def set_speed(payload: dict) -> JSONResponse:
    speed = float(payload.get("multiplier", 1.0))
    controller.speed_multiplier = max(0.1, min(5.0, speed))
    return JSONResponse({"multiplier": controller.speed_multiplier})


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    controller.clients.add(websocket)
    controller._client_last_sent[websocket] = -1
    await controller._send_pending_snapshots(websocket)
    try:
        while True:
            message = await websocket.receive_text()
            try:
                payload = json.loads(message)
            except json.JSONDecodeError:
                continue
            if payload.get("type") == "ack":
                tick = payload.get("tick")
                if isinstance(tick, int):
                    await controller.acknowledge(tick)
    except WebSocketDisconnect:
        controller.clients.discard(websocket)
        controller._client_last_sent.pop(websocket, None)


__all__ = ["app", "controller"]
