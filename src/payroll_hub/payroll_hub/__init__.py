"""SC Payroll Hub package.

This package is organized by feature modules (holidays, timesheets, audit,
employees, ...) with a thin Flask controller layer on top of pure engine
functions and small service/repository layers.
"""
