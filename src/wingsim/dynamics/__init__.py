from .state import STATE_SIZE, VehicleState
from .forces import ForceTorquePair, Gravity
from .kinematics import Kinematics, rotation_body_to_ned
from .vehicle import Vehicle
