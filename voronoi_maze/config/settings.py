"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables (prefix VORONOI_MAZE_)."""

    # Layout
    num_sites: int = Field(default=10, ge=1, description="Number of rooms")
    min_point_separation: float = Field(default=1 / 128, gt=0, description="Minimum distance between sites")
    label_precision: float = Field(default=0.005, gt=0, description="Label point search precision")
    layout_strategy: str = Field(default="first_fit", description="Layout strategy: first_fit or best_of")
    min_edge_length: float = Field(default=0.05, ge=0, description="Shortest allowed wall (first_fit)")
    corner_clearance: float = Field(default=0.05, ge=0, description="Wall-free radius around the origin (first_fit)")
    label_clearance: float = Field(default=0.025, ge=0, description="Minimum wall distance from a label point (first_fit)")
    trial_count: int = Field(default=100, ge=1, description="Layout trials (best_of)")
    max_layout_trials: Optional[int] = Field(default=None, ge=1,
                                             description="Layout trial cap (unbounded if unset)")
    exclusion_anchor_x: float = Field(default=0.975, description="Exclusion zone centre x (best_of)")
    exclusion_anchor_y: float = Field(default=0.975, description="Exclusion zone centre y (best_of)")
    exclusion_radius: float = Field(default=0.225, ge=0, description="Exclusion zone radius (best_of)")

    # Maze
    root_strategy: str = Field(default="fringe", description="Root site choice: fringe or random")

    # Waypoints
    num_waypoints: int = Field(default=4, ge=1, description="Waypoints including the start")
    min_waypoint_distance: int = Field(default=3, ge=1, description="Minimum graph distance between waypoints")
    placement_retry_budget: int = Field(default=100, ge=1, description="Placement attempts before regenerating")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_max_sites: int = Field(default=12, ge=2, description="Largest room count the API accepts")
    api_max_layout_trials: int = Field(default=500, ge=1, description="Layout trial cap for API requests")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    class Config:
        env_prefix = "VORONOI_MAZE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
