"""FastAPI main application."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import structlog
import time
import uuid
from datetime import datetime

from ..config import settings
from ..core.exceptions import LayoutExhausted, MazeError
from ..core.generator import LAYOUT_STRATEGIES, MazeOptions, VoronoiMaze, generate_maze
from ..utils.logging import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

app = FastAPI(
    title="Voronoi Maze API",
    description="Random mazes over Voronoi subdivisions of the unit square",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class StoredMaze:
    """A generated maze plus bookkeeping."""

    def __init__(self, maze_id: str, maze: VoronoiMaze, generation_time_seconds: float):
        self.maze_id = maze_id
        self.maze = maze
        self.created_at = datetime.utcnow()
        self.generation_time_seconds = generation_time_seconds


# In-process store of generated mazes
_mazes: Dict[str, StoredMaze] = {}


# Request/Response models
class MazeGenerationRequest(BaseModel):
    """Request to generate a new maze."""

    seed: Optional[str] = Field(None, description="Seed for reproducible generation")
    serial_number: Optional[str] = Field(None, description="Serial number that determines the maze passages")
    num_sites: int = Field(10, ge=2, le=settings.api_max_sites, description="Number of rooms")
    num_waypoints: int = Field(4, ge=1, le=16, description="Waypoints including the start room")
    min_waypoint_distance: int = Field(3, ge=1, le=16, description="Minimum steps between waypoints")
    layout_strategy: str = Field("first_fit", description="first_fit or best_of")


class MazeSummary(BaseModel):
    """Summary information about a generated maze."""

    id: str
    seed: Optional[str]
    serial_number: Optional[str]
    num_sites: int
    num_edges: int
    start_site: int
    targets: List[int]
    regenerations: int
    layout_trials: int
    created_at: datetime
    generation_time_seconds: float


class RoomDetail(BaseModel):
    """A single room of a maze."""

    site: int
    site_point: List[float]
    label_point: List[float]
    polygon: List[List[float]]
    neighbors: List[int]
    exits: List[int]
    is_start: bool
    target_index: Optional[int] = None


def _summary(stored: StoredMaze) -> MazeSummary:
    maze = stored.maze
    return MazeSummary(
        id=stored.maze_id,
        seed=maze.seed,
        serial_number=maze.serial_number,
        num_sites=maze.num_sites,
        num_edges=len(maze.subdivision.edges),
        start_site=maze.start_site,
        targets=maze.targets,
        regenerations=maze.regenerations,
        layout_trials=maze.layout_trials,
        created_at=stored.created_at,
        generation_time_seconds=stored.generation_time_seconds,
    )


def _get_stored(maze_id: str) -> StoredMaze:
    stored = _mazes.get(maze_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="Maze not found")
    return stored


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Voronoi Maze API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "mazes": len(_mazes)}


@app.post("/mazes/generate", response_model=MazeSummary)
def generate(request: MazeGenerationRequest):
    """
    Generate a maze and store it.

    Runs in the worker thread pool, so a slow layout search does not block
    other requests. The layout search is capped at api_max_layout_trials.
    """
    logger.info("Maze generation requested", request=request.model_dump())

    if request.layout_strategy not in LAYOUT_STRATEGIES:
        raise HTTPException(status_code=400,
                            detail=f"layout_strategy must be one of {list(LAYOUT_STRATEGIES)}")

    try:
        options = MazeOptions(
            num_sites=request.num_sites,
            num_waypoints=request.num_waypoints,
            min_waypoint_distance=request.min_waypoint_distance,
            layout_strategy=request.layout_strategy,
            max_layout_trials=settings.api_max_layout_trials,
        )
        started = time.perf_counter()
        maze = generate_maze(options, seed=request.seed or str(uuid.uuid4())[:8],
                             serial_number=request.serial_number)
        elapsed = time.perf_counter() - started
    except LayoutExhausted as e:
        logger.warning("Layout search gave up", trials=e.trials, last_reason=e.last_reason)
        raise HTTPException(status_code=422, detail=str(e))
    except MazeError as e:
        logger.error("Maze generation failed", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    maze_id = str(uuid.uuid4())
    stored = StoredMaze(maze_id, maze, round(elapsed, 4))
    _mazes[maze_id] = stored
    logger.info("Maze stored", maze_id=maze_id, seed=maze.seed)
    return _summary(stored)


@app.get("/mazes", response_model=List[MazeSummary])
async def list_mazes():
    """List all generated mazes, newest first."""
    stored = sorted(_mazes.values(), key=lambda s: s.created_at, reverse=True)
    return [_summary(s) for s in stored]


@app.get("/mazes/{maze_id}")
async def get_maze(maze_id: str):
    """Full maze data: rooms, walls, passages, distances and waypoints."""
    stored = _get_stored(maze_id)
    data = stored.maze.to_dict()
    data["id"] = maze_id
    return data


@app.get("/mazes/{maze_id}/distances", response_model=List[List[int]])
async def get_distances(maze_id: str):
    """Room-to-room step counts."""
    return _get_stored(maze_id).maze.distances.tolist()


@app.get("/mazes/{maze_id}/rooms/{site}", response_model=RoomDetail)
async def get_room(maze_id: str, site: int):
    """Geometry and connectivity of one room."""
    maze = _get_stored(maze_id).maze
    if site < 0 or site >= maze.num_sites:
        raise HTTPException(status_code=400, detail="Invalid room index")

    graph = maze.maze.graph
    polygon = maze.subdivision.polygons[site]
    label = maze.label_points[site]
    return RoomDetail(
        site=site,
        site_point=[float(v) for v in maze.subdivision.points[site]],
        label_point=[label.x, label.y],
        polygon=[[v.x, v.y] for v in polygon.vertices] if polygon is not None else [],
        neighbors=graph.neighbors(site),
        exits=maze.maze.exits(site),
        is_start=site == maze.start_site,
        target_index=maze.targets.index(site) if site in maze.targets else None,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
