"""
Application Layer for FitGuide.

This package contains:
- ports/: Abstract interfaces (what the use cases need)
- use_cases/: Workout log store, identity, profile and coaching services
- exceptions.py: Error taxonomy shared with the infrastructure layer
"""
