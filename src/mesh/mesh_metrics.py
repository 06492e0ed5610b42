import numpy as np


def cell_centroid(conn, mesh):
    return np.mean(mesh.points[np.asarray(conn, dtype=int)], axis=0)


def cell_diam(conn, mesh):
    """Largest distance between two nodes of the cell, 0 for a single node."""
    points = mesh.points[np.asarray(conn, dtype=int)]
    dx = points[:, np.newaxis, :] - points[np.newaxis, :, :]
    return float(np.max(np.linalg.norm(dx, axis=2)))


def mesh_size(mesh):
    """Minimum, mean and maximum cell diameter over the cells of the mesh."""
    conns = mesh.gcells.conn()
    if len(conns) == 0:
        return 0.0, 0.0, 0.0
    cell_sizes = np.array([cell_diam(conn, mesh) for conn in conns])
    return np.min(cell_sizes), np.mean(cell_sizes), np.max(cell_sizes)
