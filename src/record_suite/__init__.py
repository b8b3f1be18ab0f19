"""Record Suite package.

Four small record-keeping applications (product catalog, library lending,
student records, employee attendance) organized by feature module, each with
a thin Flask controller layer over service classes that talk to an injected
record store.
"""
