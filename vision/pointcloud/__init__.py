"""Point cloud construction and storage.

``projector`` defines the depth projection contract, ``texture`` maps
texture coordinates to texels, ``builder`` fills organized clouds and
``pcd`` reads and writes them as binary PCD files. ``viewer`` converts
clouds to Open3D for display and is imported on demand.
"""

from .projector import Projection, Projector
from .texture import inside_texture, sample_colors, texel_indices, texel_offsets
from .builder import CloudBuilder, OrganizedCloud
from .pcd import PcdHeader, read_pcd, read_pcd_header, write_pcd

__all__ = [
    "Projection",
    "Projector",
    "inside_texture",
    "sample_colors",
    "texel_indices",
    "texel_offsets",
    "CloudBuilder",
    "OrganizedCloud",
    "PcdHeader",
    "read_pcd",
    "read_pcd_header",
    "write_pcd",
]
