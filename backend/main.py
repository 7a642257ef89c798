from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
from models.board import Player, move_from_dict
from models.random_agent import RandomAgent
from models.minimax_agent import MinimaxAgent
from models.game_state import GameState
from notation import format_move, render_board
import logging
import time
import json

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],  # Frontend URL
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class AgentSettings(BaseModel):
    max_depth: Optional[int] = Field(None, ge=1, le=6, description="Maximum search depth for Minimax (1-6)")
    randomize_equal_moves: Optional[bool] = None

class Position(BaseModel):
    x: int
    y: int

class WallModel(BaseModel):
    orientation: str
    x: int
    y: int

class StateModel(BaseModel):
    positions: Dict[str, Position]
    walls: List[WallModel] = []
    walls_left: Dict[str, int] = {}
    turn: str = "A"

class MoveModel(BaseModel):
    type: str
    direction: Optional[str] = None
    direction_on_collision: Optional[str] = None
    orientation: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None

class StateMoveRequest(BaseModel):
    state: StateModel
    move: MoveModel

class BestMoveRequest(BaseModel):
    state: StateModel
    model: str = "minimax"
    settings: Optional[AgentSettings] = None

class PathRequest(BaseModel):
    state: StateModel
    player: str

# Default agent settings
default_settings = {
    "minimax": {
        "max_depth": 2,
        "randomize_equal_moves": False
    },
    "random": {}
}

# Initialize agents with default settings
agents = {
    "random": RandomAgent(),
    "minimax": MinimaxAgent(max_depth=default_settings["minimax"]["max_depth"],
                            randomize_equal_moves=default_settings["minimax"]["randomize_equal_moves"]),
}

def _parse_state(state: StateModel) -> GameState:
    try:
        return GameState.from_dict(state.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

def _parse_move(move: MoveModel):
    try:
        return move_from_dict(move.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

def _parse_player(name: str) -> Player:
    try:
        return Player[name]
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown player: {name}")

@app.get("/agent-settings")
async def get_all_agent_settings():
    """Get default settings for all agent models"""
    return default_settings

@app.post("/legal-move")
async def legal_move(request: StateMoveRequest):
    state = _parse_state(request.state)
    move = _parse_move(request.move)
    return {"legal": not state.is_terminal() and state.is_legal(move)}

@app.post("/apply-move")
async def apply_move(request: StateMoveRequest):
    state = _parse_state(request.state)
    move = _parse_move(request.move)
    try:
        state.apply_move(move)
    except ValueError as e:
        logger.warning(f"Rejected move {format_move(move)}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Applied {format_move(move)}, {state.turn} to move")
    return state.to_dict()

@app.post("/get-best-move")
async def get_best_move(request: BestMoveRequest):
    start_time = time.time()
    state = _parse_state(request.state)

    logger.info(f"BOARD STATE:\n{render_board(state.board)}")
    logger.info(f"Serialized state: {json.dumps(state.to_dict())}")

    if request.model not in agents:
        logger.error(f"Unknown model requested: {request.model}")
        raise HTTPException(status_code=400, detail=f"Unknown model: {request.model}")
    if state.is_terminal():
        raise HTTPException(status_code=400, detail="Game is already over")

    try:
        logger.info(f"Starting {request.model} agent calculation...")
        if request.model == "minimax" and request.settings:
            # Only update provided settings
            custom_max_depth = request.settings.max_depth if request.settings.max_depth is not None else default_settings["minimax"]["max_depth"]
            custom_randomize = request.settings.randomize_equal_moves if request.settings.randomize_equal_moves is not None else default_settings["minimax"]["randomize_equal_moves"]
            logger.info(f"Using custom minimax settings: max_depth={custom_max_depth}, randomize={custom_randomize}")
            agent = MinimaxAgent(max_depth=custom_max_depth, randomize_equal_moves=custom_randomize)
        else:
            agent = agents[request.model]

        move = agent.get_move(state)
        score = agent.best_score if isinstance(agent, MinimaxAgent) else None
    except ValueError as e:
        logger.warning(f"Agent rejected the position: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error in agent.get_move(): {e}")
        raise HTTPException(status_code=500, detail=f"Agent error: {str(e)}")

    elapsed = time.time() - start_time
    if move is None:
        logger.warning(f"Agent found no viable move, {state.turn} concedes [{elapsed:.2f}s]")
        return {"move": None, "score": score, "notation": None}

    logger.info(f"Selected: {format_move(move)} score={score} [{elapsed:.2f}s]")
    return {"move": move.to_dict(), "score": score, "notation": format_move(move)}

@app.post("/path")
async def shortest_path(request: PathRequest):
    state = _parse_state(request.state)
    player = _parse_player(request.player)
    path = state.shortest_path(player)
    if path is None:
        return {"player": player.name, "path": None, "length": None}
    return {
        "player": player.name,
        "path": [{"x": position.x, "y": position.y} for position in path],
        "length": len(path),
    }

@app.get("/")
async def root():
    logger.info("Root endpoint accessed")
    return {"message": "Welcome to the Quoridor AI Backend"}
