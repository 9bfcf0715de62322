"""HR administration backend.

Feature modules (employees, checkins, documents, feedback, auth) each carry a
thin Flask controller on top of service/repository layers over MySQL.
"""
