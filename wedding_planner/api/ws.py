"""
WebSocket manager for live seating updates
"""

import json
import logging
from datetime import datetime
from typing import Dict, List, Optional
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

SEATING_ROOM = "seating"

class WebSocketManager:
    """Manages WebSocket connections grouped into rooms"""

    def __init__(self):
        # room -> list of websockets
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, room: str):
        """Accept WebSocket connection and add it to a room"""
        await websocket.accept()
        self.active_connections.setdefault(room, []).append(websocket)
        logger.info(f"WebSocket connected to {room}. Total connections: {len(self.active_connections[room])}")

    def disconnect(self, websocket: WebSocket, room: str):
        """Remove WebSocket connection from a room"""
        connections = self.active_connections.get(room)
        if not connections or websocket not in connections:
            return

        connections.remove(websocket)
        logger.info(f"WebSocket disconnected from {room}. Remaining connections: {len(connections)}")

        # Clean up empty rooms
        if not connections:
            del self.active_connections[room]

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, room: str, message: dict):
        """Send a message to every WebSocket in a room; drop the ones that fail"""
        if room not in self.active_connections:
            logger.debug(f"No active connections for {room}")
            return

        # Copy: failed sockets are removed while iterating
        connections = self.active_connections[room].copy()

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket, room)

    async def broadcast_seating_update(self, table_number: Optional[int], guest_ids: List[int]):
        """Tell open seating pages which guests moved"""
        await self.broadcast(SEATING_ROOM, {
            "type": "seating_update",
            "table_number": table_number,
            "guest_ids": guest_ids,
            "timestamp": datetime.utcnow().isoformat(),
        })

    def get_connection_count(self, room: str) -> int:
        """Get number of active connections in a room"""
        return len(self.active_connections.get(room, []))

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/seating")
async def seating_updates(websocket: WebSocket):
    """Push seating changes to open seating charts"""
    await websocket_manager.connect(websocket, SEATING_ROOM)

    try:
        await websocket_manager.send_personal_message({
            "type": "connection",
            "message": "Connected to seating updates",
            "connection_count": websocket_manager.get_connection_count(SEATING_ROOM),
        }, websocket)

        while True:
            data = await websocket.receive_text()
            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            # Handle heartbeat/ping
            if isinstance(client_message, dict) and client_message.get("type") == "ping":
                await websocket_manager.send_personal_message({
                    "type": "pong",
                    "timestamp": client_message.get("timestamp"),
                }, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        websocket_manager.disconnect(websocket, SEATING_ROOM)
