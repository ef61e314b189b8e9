"""
Analysis package for the Banker's Algorithm Simulator.
Contains step playback and text/JSON reporting of finished runs.
"""
