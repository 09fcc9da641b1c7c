#!/usr/bin/env python3
"""Run the scripted bank simulation: python -m bank_ledger"""

from .bank import Bank
from .config import get_config
from .demo import run_demo
from .logging_config import setup_logging


def main():
    """Print the simulation report"""
    config = get_config()
    setup_logging(config.log_level, "text")

    print("--- STARTING BANK SIMULATION ---")
    for line in run_demo(Bank(config=config)):
        print(line)
    print("--- END OF SIMULATION ---")


if __name__ == "__main__":
    main()
