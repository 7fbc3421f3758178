"""Services used by the slopcannon workflow"""
