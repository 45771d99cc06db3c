# This file marks the resources package: handler classes whose methods carry verb markers.
