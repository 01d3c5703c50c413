"""
Preset configurations for common comparisons.
"""

from bottleneckpy.config.dataclasses import BottleneckConfig


class Presets:
    """
    Factory class for preset bottleneck configurations.

    Example
    -------
    >>> config = Presets.exact()
    >>> config = Presets.approximate(0.01)
    >>> config = Presets.get_preset("approximate")
    """

    @staticmethod
    def exact() -> BottleneckConfig:
        """Exact distance over all dimensions, infinite intervals dropped."""
        return BottleneckConfig()

    @staticmethod
    def approximate(e: float = 0.01) -> BottleneckConfig:
        """
        Approximate distance within e.

        Faster on large diagrams: intervals of persistence <= e are ignored
        and the search stops once the bracket is narrower than 2e.
        """
        return BottleneckConfig(e=e)

    @staticmethod
    def get_preset(name: str) -> BottleneckConfig:
        """
        Get preset by name.

        Parameters
        ----------
        name : str
            Preset name: "exact" or "approximate".

        Returns
        -------
        BottleneckConfig
            Preset configuration.
        """
        presets = {
            "exact": Presets.exact,
            "approximate": Presets.approximate,
        }

        if name not in presets:
            available = ", ".join(presets.keys())
            raise ValueError(f"Unknown preset: '{name}'. Available: {available}")

        return presets[name]()
