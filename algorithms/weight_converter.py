class WeightConverter:
    """Utility for converting between kg and lbs."""

    KG_TO_LB = 2.20462
    UNITS = ("kg", "lbs")

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return kg * WeightConverter.KG_TO_LB

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return lb / WeightConverter.KG_TO_LB

    @classmethod
    def convert(cls, weight: float, from_unit: str, to_unit: str) -> float:
        """Convert ``weight`` between two units."""
        for unit in (from_unit, to_unit):
            if unit not in cls.UNITS:
                raise ValueError(f"unknown weight unit: {unit}")
        if from_unit == to_unit:
            return float(weight)
        if from_unit == "kg":
            return cls.kg_to_lb(weight)
        return cls.lb_to_kg(weight)

    @classmethod
    def to_kg(cls, weight: float, unit: str) -> float:
        return cls.convert(weight, unit, "kg")
