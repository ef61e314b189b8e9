"""
Models package for the Banker's Algorithm Simulator.
Contains the input system state and the recorded step snapshots.
"""
