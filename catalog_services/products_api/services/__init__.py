# This file marks the products services package: store access and the users-service client.
