import warnings
from typing import List, Optional, Tuple, Union

import geopandas as gpd
import numpy as np
import pandas as pd
import pyproj
from pyproj import CRS
from shapely.errors import GEOSException
from shapely.geometry import LinearRing, LineString, Polygon
from shapely.geometry.base import BaseGeometry

from .batch_operations import simplify_batch
from .geometry_utils import hausdorff_distance

SUPPORTED_GEOMETRY_TYPES = (LineString, LinearRing, Polygon)


def _geometry_parts(geometry: BaseGeometry) -> List[np.ndarray]:
    """Coordinate arrays to simplify for one geometry, in rebuild order."""
    if isinstance(geometry, Polygon):
        return [np.asarray(geometry.exterior.coords)] + [
            np.asarray(interior.coords) for interior in geometry.interiors
        ]
    return [np.asarray(geometry.coords)]


def _rebuild_geometry(geometry: BaseGeometry, parts: List[np.ndarray]) -> BaseGeometry:
    """
    Builds a geometry of the same type from simplified coordinate arrays.

    Rings that collapse below the minimum number of coordinates cannot be
    rebuilt; the original geometry is returned with a warning.
    """
    try:
        if isinstance(geometry, Polygon):
            return Polygon(parts[0], parts[1:])
        return type(geometry)(parts[0])
    except (ValueError, GEOSException) as e:
        warnings.warn(f"Error creating simplified geometry: {e}. Returning original.")
        return geometry


def simplify_geodataframe(
    geodataframe: gpd.GeoDataFrame,
    epsilon: float = 0.0,
    worker_count: int = 1,
    target_crs: Optional[Union[str, pyproj.CRS]] = None,
    check_projection: bool = True,
    include_metadata: bool = False,
) -> gpd.GeoDataFrame:
    """
    Simplifies line and polygon geometries in a GeoDataFrame.

    Multi-part geometries are exploded into single parts. Every line, ring
    and polygon ring is collected into one batch and simplified with the
    Ramer-Douglas-Peucker algorithm across ``worker_count`` threads.

    Parameters:
    -----------
    geodataframe : geopandas.GeoDataFrame
        Input GeoDataFrame with LineString, LinearRing or Polygon geometries
        (or their multi-part versions).
    epsilon : float, optional
        Simplification tolerance in the units of the working CRS. Defaults to 0.0.
    worker_count : int, optional
        Number of worker threads, one of 1, 2 or 4. Defaults to 1.
    target_crs : str or pyproj.CRS, optional
        CRS to simplify in. The result is projected back to the input CRS.
    check_projection : bool, optional
        If True and no target_crs is given, warns when the input CRS is
        geographic. Defaults to True.
    include_metadata : bool, optional
        If True, adds the columns:
        - 'vertices_in': vertex count before simplification
        - 'vertices_out': vertex count after simplification
        - 'hausdorff': Hausdorff distance between original and simplified
          coordinates (exterior ring for polygons)

    Returns:
    --------
    geopandas.GeoDataFrame
        A new GeoDataFrame with simplified geometries. Original attributes are
        preserved. Unsupported geometry types are returned unchanged; rows
        whose geometry could not be simplified are dropped.
    """
    # Make a copy to avoid modifying the original GeoDataFrame
    result_geodataframe = geodataframe.copy()

    if geodataframe.crs is None:
        warnings.warn("Input GeoDataFrame has no CRS defined.")

    original_crs = geodataframe.crs
    if target_crs is not None:
        result_geodataframe = result_geodataframe.to_crs(target_crs)
    elif check_projection and geodataframe.crs is not None:
        crs = CRS.from_user_input(geodataframe.crs)
        if not crs.is_projected:
            warnings.warn(
                "Input GeoDataFrame is in a geographic CRS (not projected). "
                "Tolerance is applied in degrees. Consider setting target_crs."
            )

    result_geodataframe = result_geodataframe.explode(ignore_index=True)
    geometries = list(result_geodataframe.geometry)

    # Flatten every supported geometry into batch entries
    batch: List[np.ndarray] = []
    part_slots: List[Tuple[int, int]] = []
    unsupported_types = set()
    for row_position, geometry in enumerate(geometries):
        if geometry is None or geometry.is_empty:
            continue
        if not isinstance(geometry, SUPPORTED_GEOMETRY_TYPES):
            unsupported_types.add(geometry.geom_type)
            continue
        parts = _geometry_parts(geometry)
        start = len(batch)
        batch.extend(parts)
        part_slots.append((row_position, start))

    if unsupported_types:
        warnings.warn(
            f"Unsupported geometry types: {sorted(unsupported_types)}. Returning original."
        )

    batch_result = simplify_batch(batch, epsilon=epsilon, worker_count=worker_count)

    new_geometries = list(geometries)
    vertices_in = pd.Series(np.nan, index=result_geodataframe.index)
    vertices_out = pd.Series(np.nan, index=result_geodataframe.index)
    hausdorff = pd.Series(np.nan, index=result_geodataframe.index)
    failed_rows = []

    for row_position, start in part_slots:
        geometry = geometries[row_position]
        end = start + len(_geometry_parts(geometry))
        if any(k in batch_result.errors for k in range(start, end)):
            failed_rows.append(row_position)
            continue

        simplified_parts = batch_result.polylines[start:end]
        new_geometries[row_position] = _rebuild_geometry(geometry, simplified_parts)

        if include_metadata:
            label = result_geodataframe.index[row_position]
            vertices_in[label] = sum(len(part) for part in batch[start:end])
            vertices_out[label] = sum(
                len(part) for part in _geometry_parts(new_geometries[row_position])
            )
            hausdorff[label] = hausdorff_distance(
                batch[start], _geometry_parts(new_geometries[row_position])[0]
            )

    result_geodataframe[result_geodataframe.geometry.name] = gpd.GeoSeries(
        new_geometries,
        index=result_geodataframe.index,
        crs=result_geodataframe.crs,
    )

    if include_metadata:
        result_geodataframe["vertices_in"] = vertices_in
        result_geodataframe["vertices_out"] = vertices_out
        result_geodataframe["hausdorff"] = hausdorff

    if failed_rows:
        warnings.warn(
            f"Failed to simplify {len(failed_rows)} geometries. Dropping them."
        )
        result_geodataframe = result_geodataframe.drop(
            index=result_geodataframe.index[failed_rows]
        )

    # Reproject back to original CRS if necessary
    if target_crs is not None and original_crs is not None:
        result_geodataframe = result_geodataframe.to_crs(original_crs)

    return result_geodataframe
