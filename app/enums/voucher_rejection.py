from enum import Enum

class VoucherRejection(str, Enum):
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    BELOW_MINIMUM_PURCHASE = "below_minimum_purchase"
    LOOKUP_FAILED = "lookup_failed"
