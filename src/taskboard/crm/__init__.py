"""
CRM subsystem.

Components:
- crm_models.py: Contact, Company, Deal (+ activities, stages), Lead
- crm_services.py: per-entity services built on the generic CrudService
- dashboard.py: headline CRM numbers
"""
