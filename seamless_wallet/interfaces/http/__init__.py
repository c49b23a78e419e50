"""HTTP interface: dependencies and routers."""
