from enum import Enum


class ParseableEnum(Enum):
    @classmethod
    def _missing_(cls, val):
        if isinstance(val, str):
            normalized = val.strip().upper().replace(" ", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    def __str__(self):
        return self.value

    def __eq__(self, other):
        if isinstance(other, str):
            return self.value == other.upper()
        return super().__eq__(other)

    def __hash__(self):
        return hash(self.value)


class ResourceType(ParseableEnum):
    DATABASE = "DATABASE"
    USER = "USER"
    WAREHOUSE = "WAREHOUSE"


class AccountEdition(ParseableEnum):
    STANDARD = "STANDARD"
    ENTERPRISE = "ENTERPRISE"
    BUSINESS_CRITICAL = "BUSINESS_CRITICAL"


class WarehouseScalingPolicy(ParseableEnum):
    STANDARD = "STANDARD"
    ECONOMY = "ECONOMY"


class WarehouseSize(ParseableEnum):
    XSMALL = "XSMALL"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    XLARGE = "XLARGE"
    XXLARGE = "XXLARGE"
    XXXLARGE = "XXXLARGE"
    X4LARGE = "X4LARGE"
    X5LARGE = "X5LARGE"
    X6LARGE = "X6LARGE"

    @classmethod
    def _missing_(cls, val):
        # SHOW WAREHOUSES reports sizes as "X-Small", "2X-Large", ...
        if isinstance(val, str):
            normalized = val.strip().upper().replace("-", "").replace("_", "")
            normalized = _SIZE_ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return None


_SIZE_ALIASES = {
    "2XLARGE": "XXLARGE",
    "3XLARGE": "XXXLARGE",
    "4XLARGE": "X4LARGE",
    "5XLARGE": "X5LARGE",
    "6XLARGE": "X6LARGE",
}
