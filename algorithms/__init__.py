"""
Algorithms package for the Banker's Algorithm Simulator.
Contains the safety algorithm and its step-by-step trace.
"""
