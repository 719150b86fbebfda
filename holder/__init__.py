"""
Parametric 3D-printable holder for small boards and their connectors.

Builds the holder from primitive solids with trimesh, compensates for
material shrinkage and writes a printable STL.
"""

__version__ = "0.1.0"
