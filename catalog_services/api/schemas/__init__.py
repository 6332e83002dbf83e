# This file marks the schemas package for shared request and response models.
