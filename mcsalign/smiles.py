import argparse
import io
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from PIL import Image
from rdkit import Chem
from rdkit.Chem import rdDepictor
from rdkit.Chem.Draw import rdMolDraw2D

from .alignment import Alignment
from .consensus import edge_provenance
from .driver import align_networks
from .loader import networks_from_data
from .network import Network
from .params import Parameters, add_alignment_arguments

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]

# Conservation -> bond highlight color
COLOR_MAP: Dict[int, Color] = {
    2: (0.83, 0.83, 0.83),  # light grey
    3: (1.0, 0.75, 0.8),    # pink
    4: (1.0, 0.65, 0.0),    # orange
    5: (1.0, 0.0, 0.0),     # red
}


def int_to_alpha(num: int) -> str:
    """
    Convert a 1-based integer to a lexicographic string:
       1 -> 'a'
       2 -> 'b'
       ...
       26 -> 'z'
       27 -> 'aa'
       28 -> 'ab'
       etc.
    """
    s = []
    while num > 0:
        num -= 1
        s.append(chr(ord('a') + (num % 26)))
        num //= 26
    return ''.join(reversed(s))


def atom_label(prefix: str, atom_idx: int) -> str:
    return f"{prefix}{atom_idx + 1}"


def molecule_to_network_data(mol: Chem.Mol, mol_index: int, name: Optional[str] = None) -> Dict[str, Any]:
    """
    Given an RDKit Mol, returns one entry of the ``networks`` input list:
     - nodes: [{"id": atom_id, "name": <atom symbol>}, ...]
     - edges: [{"source": atom_id, "target": atom_id, "label": <bond type>}, ...]

    Atom ids use a lexicographic prefix (a, b, ... z, aa, ab, ...) based on the
    1-based mol_index. Every bond gets a 'bondNote' with its edge number, which
    RDKit draws next to the bond.
    """
    rdDepictor.Compute2DCoords(mol)
    prefix = int_to_alpha(mol_index)

    nodes = [{"id": atom_label(prefix, atom.GetIdx()), "name": atom.GetSymbol()} for atom in mol.GetAtoms()]
    edges = []
    for bond_counter, bond in enumerate(mol.GetBonds(), start=1):
        bond.SetProp("bondNote", f"{prefix}{bond_counter}")
        edges.append({
            "source": atom_label(prefix, bond.GetBeginAtomIdx()),
            "target": atom_label(prefix, bond.GetEndAtomIdx()),
            "label": str(bond.GetBondType()),  # e.g. 'SINGLE', 'DOUBLE'
        })
    return {"name": name or prefix, "nodes": nodes, "edges": edges}


def conserved_bonds(mol: Chem.Mol, alignment: Alignment, consensus: Network, index: int) -> Dict[int, int]:
    """
    Map bond indices of molecule ``index`` to the conservation of the
    consensus edge they are part of. Only edges present in at least two
    molecules are reported.
    """
    atom_index = {atom_label(int_to_alpha(index + 1), atom.GetIdx()): atom.GetIdx() for atom in mol.GetAtoms()}
    counts: Dict[int, int] = {}
    for edge in consensus.edges():
        if edge.conservation < 2:
            continue
        source_edge = edge_provenance(alignment, edge)[index]
        if source_edge is None:
            continue
        bond = mol.GetBondBetweenAtoms(atom_index[source_edge.source.label], atom_index[source_edge.target.label])
        if bond is not None:
            counts[bond.GetIdx()] = max(counts.get(bond.GetIdx(), 0), edge.conservation)
    return counts


def draw_molecule_as_pil(mol: Chem.Mol, highlight: Optional[Dict[int, int]] = None,
                         size: Tuple[int, int] = (400, 400), annotation_scale: float = 0.5) -> Image.Image:
    """
    Draw the RDKit Mol into a PIL image (PNG) with bond labels (bondNote).

    ``highlight`` maps bond indices to the number of molecules sharing the
    bond; bonds shared by 2, 3, 4 and 5 or more molecules are drawn grey,
    pink, orange and red.
    """
    highlight_bonds = []
    highlight_bond_colors = {}
    for b_idx, count in sorted((highlight or {}).items()):
        if count < 2:
            continue
        highlight_bonds.append(b_idx)
        highlight_bond_colors[b_idx] = COLOR_MAP[min(count, 5)]

    drawer = rdMolDraw2D.MolDraw2DCairo(size[0], size[1])
    opts = drawer.drawOptions()
    opts.annotationFontScale = annotation_scale

    drawer.DrawMolecule(
        mol,
        highlightAtoms=[],
        highlightBonds=highlight_bonds,
        highlightAtomColors={},
        highlightBondColors=highlight_bond_colors
    )
    drawer.FinishDrawing()

    png_data = drawer.GetDrawingText()
    return Image.open(io.BytesIO(png_data))


def combine_images_side_by_side(images: Sequence[Image.Image], padding: int = 10,
                                background_color: Tuple[int, int, int] = (255, 255, 255)) -> Optional[Image.Image]:
    """
    Places a list of PIL images side by side into one wide image.
    Returns the combined PIL image, or None if no images provided.
    """
    if not images:
        return None

    widths = [img.width for img in images]
    heights = [img.height for img in images]

    total_width = sum(widths) + padding * (len(images) - 1)
    max_height = max(heights)

    combined_img = Image.new('RGB', (total_width, max_height), background_color)

    x_offset = 0
    for img in images:
        combined_img.paste(img, (x_offset, 0))
        x_offset += img.width + padding

    return combined_img


def parse_molecules(smiles: Sequence[str]) -> List[Chem.Mol]:
    molecules = []
    for smi in smiles:
        mol = Chem.MolFromSmiles(smi)
        if not mol:
            logger.warning(f"Skipping invalid SMILES: {smi}")
            continue
        molecules.append(mol)
    return molecules


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Convert SMILES molecules into network input and draw them.")
    parser.add_argument("smiles", nargs="*", help="SMILES strings of the molecules.")
    parser.add_argument("--align", action="store_true",
                        help="Align the molecules and highlight conserved bonds in the drawing.")
    parser.add_argument("--collage", type=str, default="all_labeled_molecules.png",
                        help="Image file for the side-by-side drawing of the molecules.")
    parser.add_argument("--win", action="store_true", help="Show the drawing in a window.")
    add_alignment_arguments(parser)
    args = parser.parse_args(argv)

    molecules = parse_molecules(args.smiles)
    data = {"networks": [molecule_to_network_data(mol, i + 1) for i, mol in enumerate(molecules)]}

    # Print only the JSON, no extra messages
    print(json.dumps(data, indent=2))

    if not molecules:
        return 0

    highlights: List[Dict[int, int]] = [{} for _ in molecules]
    if args.align:
        if len(molecules) < 2:
            logger.error("At least two valid molecules are needed for --align")
            return 1
        try:
            params = Parameters.from_args(args)
        except ValueError as e:
            logger.error(f"Invalid parameters: {e}")
            return 1
        _, networks = networks_from_data(data)
        result = align_networks(networks, params)
        consensus = result.build_network(params)
        highlights = [conserved_bonds(mol, result.alignment, consensus, i) for i, mol in enumerate(molecules)]

    images = [draw_molecule_as_pil(mol, highlight) for mol, highlight in zip(molecules, highlights)]
    collage = combine_images_side_by_side(images, padding=20)
    if collage is None:
        return 0
    collage.save(args.collage)

    if args.win:
        plt.figure()
        plt.imshow(collage)
        plt.axis("off")
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
