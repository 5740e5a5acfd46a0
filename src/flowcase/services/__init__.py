"""
Domain services for flowcase.

Contains the main business logic services:
- diagram_parsing: Converts flowchart text into a typed node/edge graph
- testcase_generation: Enumerates execution paths and synthesizes test cases
"""
