from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import plotly.graph_objects as go

from kepler_sim.core.constants import R_EARTH_KM
from kepler_sim.core.frames import Vector3

Track = List[Tuple[float, Vector3, Vector3]]


def _body_mesh(radius_km: float, n_lat: int = 30, n_lon: int = 60):
    # Sphere mesh for the central body (parametric)
    lats = [(-math.pi / 2) + i * (math.pi / (n_lat - 1)) for i in range(n_lat)]
    lons = [(-math.pi) + j * (2 * math.pi / (n_lon - 1)) for j in range(n_lon)]

    x = [[radius_km * math.cos(lat) * math.cos(lon) for lon in lons] for lat in lats]
    y = [[radius_km * math.cos(lat) * math.sin(lon) for lon in lons] for lat in lats]
    z = [[radius_km * math.sin(lat) for _lon in lons] for lat in lats]
    return x, y, z


def build_orbit_figure(
    tracks: Dict[str, Track],
    body_radius_km: Optional[float] = R_EARTH_KM,
    title: str = "Two-body propagation",
) -> go.Figure:
    """
    Build a 3D figure with:
      - the central body as a sphere (skipped if body_radius_km is None)
      - one line trace per track, from Orbit.ephem() samples
      - a marker at the first sample of each track
    """
    fig = go.Figure()

    if body_radius_km is not None:
        bx, by, bz = _body_mesh(body_radius_km)
        fig.add_trace(go.Surface(x=bx, y=by, z=bz, showscale=False, opacity=0.35, name="Central body"))

    for name, samples in tracks.items():
        if not samples:
            raise ValueError(f"Track '{name}' has no samples.")
        xs = [r[0] for (_t, r, _v) in samples]
        ys = [r[1] for (_t, r, _v) in samples]
        zs = [r[2] for (_t, r, _v) in samples]

        fig.add_trace(go.Scatter3d(x=xs, y=ys, z=zs, mode="lines", name=f"{name} track"))
        fig.add_trace(go.Scatter3d(
            x=[xs[0]], y=[ys[0]], z=[zs[0]],
            mode="markers",
            name=f"{name} start",
            marker=dict(size=5),
        ))

    fig.update_layout(
        title=title,
        scene=dict(
            xaxis_title="X (km)",
            yaxis_title="Y (km)",
            zaxis_title="Z (km)",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render_orbit_scene(
    tracks: Dict[str, Track],
    out_html: str = "out/orbit_scene.html",
    body_radius_km: Optional[float] = R_EARTH_KM,
) -> str:
    """Write the figure from build_orbit_figure to a standalone HTML file and return its path."""
    fig = build_orbit_figure(tracks, body_radius_km=body_radius_km)

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
