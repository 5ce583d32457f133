#!/usr/bin/env python3
"""
Simple runner script for the maze key solver.

Usage:
    python run_solver.py maze.txt              # One agent
    python run_solver.py maze.txt --agents 4   # Four agents, one per quadrant
    python run_solver.py maze.txt --split      # Split the start into four, then four agents
    python run_solver.py --debug < maze.txt    # Progress lines enabled
"""

import os
import sys
import subprocess
from pathlib import Path
import argparse

def main():
    parser = argparse.ArgumentParser(description='Run the maze key solver')
    parser.add_argument('maze', nargs='?', default='-',
                       help="maze file, or '-' for standard input")
    parser.add_argument('--agents', type=int, choices=(1, 4), default=1,
                       help='number of agents')
    parser.add_argument('--split', action='store_true',
                       help='split the start into four before solving')
    parser.add_argument('--debug', action='store_true',
                       help='Enable progress output (verbose)')
    parser.add_argument('--quiet', action='store_true',
                       help='Disable progress output (clean)')
    
    args = parser.parse_args()
    
    project_root = Path(__file__).parent
    
    env = dict(os.environ)
    if args.debug:
        env['KEYMAZE_DEBUG'] = '1'
    elif args.quiet:
        env['KEYMAZE_DEBUG'] = '0'

    maze = args.maze if args.maze == '-' else str(Path(args.maze).resolve())
    cmd = [sys.executable, "-m", "keymaze.solver.simulator", maze, "--agents", str(args.agents)]
    if args.split:
        cmd.append("--split")

    try:
        subprocess.run(cmd, cwd=project_root / "src", env=env, check=True)
    except subprocess.CalledProcessError as e:
        sys.exit(e.returncode)
    except KeyboardInterrupt:
        print("\n⏹️  Solver interrupted by user")
        sys.exit(1)

if __name__ == "__main__":
    main()
