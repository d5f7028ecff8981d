"""Asset pipes, the bundle builder and the asset manager."""