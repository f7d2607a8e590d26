from enum import Enum

# percentage, fixed
class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
