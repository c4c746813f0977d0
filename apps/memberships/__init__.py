"""Customer membership tiers and the discounts they grant."""
