"""Allow running with: python -m mcbox

Prints version info and a short usage summary.
"""
import mcbox


def main():
    print(f"mcbox {mcbox.__version__} - Metropolis Monte Carlo box state core")
    print()
    print("Usage:")
    print("  python -m pytest tests/   Run tests")
    print()
    print("Quick start:")
    print("  from mcbox.builder import BoxBuilder, load_box")
    print("  from mcbox.sampling import UniformRandomSource")
    print("  box = load_box('box.yaml')")
    print("  index = box.propose_move(box.choose_molecule())")
    print("  box.rollback(index)")


main()
