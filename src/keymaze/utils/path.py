from pathlib import Path

def get_project_root() -> Path:
    """Get the root directory of the project (the directory holding src/ and data/)."""
    script_dir = Path(__file__).parent
    if script_dir.name == "keymaze":
        return script_dir.parent.parent
    return script_dir.parent.parent.parent


def get_maze_dir() -> Path:
    return get_project_root() / "data" / "mazes"
