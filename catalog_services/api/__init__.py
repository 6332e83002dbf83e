# This package holds the HTTP plumbing shared by the users and products services.
