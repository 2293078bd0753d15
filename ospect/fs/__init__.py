"""Extended file attributes and mounted filesystems, per platform and combined."""