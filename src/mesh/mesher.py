from geometry.gcellset import P1, Q4
from mesh.mesh import Mesh


def l_shape_2x2():
    """L-shaped domain of three unit-half quadrilaterals."""
    xyz = [
        [1 / 2, 0],
        [1, 0],
        [1, 1 / 2],
        [1 / 2, 1 / 2],
        [1, 1],
        [1 / 2, 1],
        [0, 1],
        [0, 1 / 2],
    ]
    conn = [
        [0, 1, 2, 3],
        [3, 2, 4, 5],
        [3, 5, 6, 7],
    ]
    return Mesh(xyz=xyz, gcells=Q4(conn))


def l2_block(w, nx):
    p0d = Mesh(xyz=[[]], gcells=P1([[0]]))
    return p0d.extrude([w / nx] * nx, [True] * nx)


def q4_block(w, l, nx, ny):
    l2 = l2_block(w, nx)
    return l2.extrude([l / ny] * ny, [True] * ny)


def h8_block(w, l, h, nx, ny, nz):
    q4 = q4_block(w, l, nx, ny)
    return q4.extrude([h / nz] * nz, [True] * nz)
