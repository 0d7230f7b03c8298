"""
SafetyNet query engine — joins residents, mappings and medical records.

Components:
- age: age and minor classification from a birthdate
- views: field-subset projections of a resident (PersonView)
- alerts: the alert queries over the record store
"""
