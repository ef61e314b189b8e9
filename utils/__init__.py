"""
Utilities package for the Banker's Algorithm Simulator.
Contains the logger and the JSON scenario loader.
"""
