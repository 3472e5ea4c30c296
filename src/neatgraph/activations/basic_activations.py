import numpy as np

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.clip(z, -1.0, 1.0)

def relu_activation(z):
    return np.maximum(0.0, z)

def sigmoid_activation(z):
    Z = np.clip(z, -100, 100)   # to prevent under/overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-Z))

def steep_sigmoid_activation(z):
    K = 4.9
    Z = np.clip(K * z, -100, 100)
    return 1.0 / (1.0 + np.exp(-Z))

def tanh_activation(z):
    return np.tanh(z)

def sin_activation(z):
    return np.sin(z)

def gauss_activation(z):
    z_clipped = np.clip(z, -3.4, 3.4)
    return np.exp(-5.0 * z_clipped ** 2)

def abs_activation(z):
    return np.abs(z)

activations = {
    "identity"     : identity_activation,
    "clamped"      : clamped_activation,
    "relu"         : relu_activation,
    "sigmoid"      : sigmoid_activation,
    "steep_sigmoid": steep_sigmoid_activation,
    "tanh"         : tanh_activation,
    "sin"          : sin_activation,
    "gauss"        : gauss_activation,
    "abs"          : abs_activation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "identity"     : "IDN",
    "clamped"      : "CLP",
    "relu"         : "RLU",
    "sigmoid"      : "SIG",
    "steep_sigmoid": "SSG",
    "tanh"         : "TNH",
    "sin"          : "SIN",
    "gauss"        : "GSS",
    "abs"          : "ABS"
    }
