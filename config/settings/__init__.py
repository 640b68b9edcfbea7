"""Settings package for the travel booking project.

`base.py` contains the configuration shared by every environment. The
`dev.py`, `prod.py` and `test.py` modules extend it with environment
specific overrides.
"""
