from enum import Enum


class VehicleType(str, Enum):
    SEDAN = "sedan"
    SUV = "suv"
    TRUCK = "truck"

    def __str__(self):
        return self.value


class DistanceBand(str, Enum):
    SHORT = "short"
    MID = "mid"
    LONG = "long"

    def __str__(self):
        return self.value


class DeliveryType(str, Enum):
    EXPEDITED = "expedited"
    FLEXIBLE = "flexible"
    STANDARD = "standard"

    def __str__(self):
        return self.value
