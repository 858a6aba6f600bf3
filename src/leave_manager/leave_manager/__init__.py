"""Leave Manager package.

Leave request lifecycle and availability engine of the HR records manager,
organized as a feature module (leaves) with a thin Flask controller layer on
top of service/repository layers.
"""
