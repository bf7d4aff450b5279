"""HRMS client package.

Organised by feature modules (auth, employees, attendance, leaves, teams,
payroll, analytics, reports) with a thin Flask controller layer over
service/repository layers. Repositories talk to the remote HRMS REST API.
"""
