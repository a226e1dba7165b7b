from .money import round_ratio, round_up_to_step, to_money

__all__ = [
    "to_money",
    "round_ratio",
    "round_up_to_step",
]
