"""Month calendar with recurring events and gesture editing for the Life Planner."""

__version__ = "0.1.0"
