from topology.cell_topology import Topology


def cofaces(topology: Topology, dimension, cell_index):
    # top cells containing the given cell
    entity_map = topology.entity_map_by_dimension(dimension)
    neigh_list = [
        top_id[1] for top_id in entity_map.predecessors((dimension, cell_index))
    ]
    return sorted(neigh_list)


def faces(topology: Topology, top_cell_index, dimension):
    entity_map = topology.entity_map_by_dimension(dimension)
    neigh_list = [
        sub_id[1]
        for sub_id in entity_map.successors((topology.dimension, top_cell_index))
    ]
    return neigh_list


def neighbors_by_codimension_1(topology: Topology):
    """Map each top cell to the cells across its faces.

    A face on the boundary contributes -1 in place of a neighbor.
    """
    dim = topology.dimension
    cell_idx_to_neigh_idxs = {}
    if dim == 0:
        return cell_idx_to_neigh_idxs
    for cell_id in range(topology.n_cells_by_dimension(dim)):
        neigh_idxs = []
        for face_id in faces(topology, cell_id, dim - 1):
            neighs = cofaces(topology, dim - 1, face_id)
            if len(neighs) == 2:
                neighs.remove(cell_id)
                neigh_idxs.append(neighs[0])
            else:
                neigh_idxs.append(-1)
        cell_idx_to_neigh_idxs[cell_id] = neigh_idxs
    return cell_idx_to_neigh_idxs
