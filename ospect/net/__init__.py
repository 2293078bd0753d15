"""Network interfaces and TCP and UDP connections."""