"""
Yeast Models
Commercial yeast forms and microbial strains with their cardinal temperatures
"""
from enum import Enum


class YeastType(Enum):
    """
    Commercial form of the leavening agent

    factor: performance relative to fresh compressed yeast
    """
    # compressed cake yeast, highly perishable
    FRESH = 1.
    # coarse granules, usually rehydrated first
    ACTIVE_DRY = 2.4
    # fine granules, added directly to the flour
    INSTANT_DRY = 3.125

    def __init__(self, factor: float):
        self.factor = factor


class YeastStrain(Enum):
    """
    Microorganism driving the fermentation, described by the cardinal
    temperature model with inflection (Rosso et al. 1993)

    Values are (T_min, T_opt, T_max) in °C and the maximum specific
    growth rate in 1/h.
    """
    SACCHAROMYCES_CEREVISIAE_CECT10131 = (0.74, 32.8, 45.9, 0.449)
    SACCHAROMYCES_CEREVISIAE_AVERAGE = (2.84, 32.27, 45.39, 0.368)
    SACCHAROMYCES_BAYANUS_UVARUM = (2.84, 32.27, 45.39, 0.295)
    SACCHAROMYCES_CEREVISIAE_CEN_PK113_7D = (0.368, 30.03, 41.21, 0.368)
    SACCHAROMYCES_CEREVISIAE_CPE7 = (4.38, 31.62, 45.5, 0.298)
    CANDIDA_MILLERI = (8., 27., 35.9, 0.42)
    LACTOBACILLUS_SANFRANCISCENSIS = (4.5, 32.5, 41., 0.71)
    LACTOBACILLUS_BREVIS = (15., 44.6, 53., 1.8)

    def __init__(self, temperature_min: float, temperature_opt: float, temperature_max: float,
                 mu_opt: float):
        self.temperature_min = temperature_min
        self.temperature_opt = temperature_opt
        self.temperature_max = temperature_max
        self.mu_opt = mu_opt

    def is_viable_at(self, temperature: float) -> bool:
        return self.temperature_min < temperature < self.temperature_max

    def maximum_specific_growth_rate(self, temperature: float) -> float:
        """
        Specific growth rate at the given temperature

        Args:
            temperature: Dough temperature [°C]

        Returns:
            Growth rate [1/h], zero outside (T_min, T_max)
        """
        if not self.is_viable_at(temperature):
            return 0.

        t_min, t_opt, t_max = self.temperature_min, self.temperature_opt, self.temperature_max
        numerator = (temperature - t_max) * (temperature - t_min) ** 2
        denominator = (t_opt - t_min) * (
            (t_opt - t_min) * (temperature - t_opt)
            - (t_opt - t_max) * (t_opt + t_min - 2. * temperature)
        )
        return self.mu_opt * numerator / denominator
