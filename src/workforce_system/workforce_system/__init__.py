"""Construction workforce back end.

Organized by feature modules (workers, sites, job types, attendance,
fingerprints, payroll), each with a repository layer, a service layer and a
thin Flask controller that speaks JSON.
"""
