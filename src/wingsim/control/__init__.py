"""
Control inputs: open-loop sequences and trim.

``Trimmer`` lives in ``wingsim.control.trim``; it depends on the Supervisor
and is therefore not imported here.
"""

from .controller import CONTROL_SIZE, Controller

__all__ = ["CONTROL_SIZE", "Controller"]
