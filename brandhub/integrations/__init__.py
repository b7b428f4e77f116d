"""Clients for external collaborators: Stripe billing and S3 blob storage."""
