"""
Test suite калькулятора UnSure

Contains:
- tests/unit/          : Unit tests для plain/currency pipeline, математики и presentation
"""
