"""
Curated question pools for concept categories and the daily challenge.

Each entry is (question, correct answer, explanation, four options).
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..models.quiz_models import QuizCategory

PoolEntry = Tuple[str, str, str, List[str]]


IP_ADDRESSING_POOL: List[PoolEntry] = [
    ("What class is IP 10.0.0.1?", "Class A",
     "IPs 1-126 are Class A.",
     ["Class A", "Class B", "Class C", "Class D"]),
    ("What class is IP 172.16.0.1?", "Class B",
     "IPs 128-191 are Class B.",
     ["Class A", "Class B", "Class C", "Class D"]),
    ("What class is IP 192.168.1.1?", "Class C",
     "IPs 192-223 are Class C.",
     ["Class A", "Class B", "Class C", "Class D"]),
    ("What is the loopback address?", "127.0.0.1",
     "127.0.0.1 is reserved for loopback.",
     ["127.0.0.1", "192.168.0.1", "10.0.0.1", "0.0.0.0"]),
    ("How many bits in an IPv4 address?", "32",
     "IPv4 uses 32 bits (4 octets × 8 bits).",
     ["16", "32", "64", "128"]),
    ("What is the broadcast address for 192.168.1.0/24?", "192.168.1.255",
     "With /24, the last octet is all 1s = 255.",
     ["192.168.1.255", "192.168.1.0", "192.168.1.1", "192.168.0.255"]),
]

SUBNETTING_POOL: List[PoolEntry] = [
    ("How many hosts in a /24 network?", "254",
     "/24 = 256 addresses - 2 (network + broadcast) = 254.",
     ["254", "256", "128", "252"]),
    ("What subnet mask is /16?", "255.255.0.0",
     "/16 means first 16 bits are 1s.",
     ["255.255.0.0", "255.0.0.0", "255.255.255.0", "255.255.128.0"]),
    ("What CIDR is 255.255.255.0?", "/24",
     "255.255.255.0 has 24 bits set to 1.",
     ["/24", "/16", "/8", "/32"]),
    ("How many subnets with /26?", "4",
     "/26 borrows 2 bits from /24, giving 2² = 4 subnets.",
     ["2", "4", "8", "16"]),
    ("What is the network address of 192.168.1.130/25?", "192.168.1.128",
     "/25 splits at 128. 130 > 128, so network is .128.",
     ["192.168.1.128", "192.168.1.0", "192.168.1.64", "192.168.1.192"]),
]

PROTOCOLS_POOL: List[PoolEntry] = [
    ("What protocol resolves IP to MAC?", "ARP",
     "ARP (Address Resolution Protocol) maps IP → MAC.",
     ["ARP", "DNS", "DHCP", "ICMP"]),
    ("What protocol does ping use?", "ICMP",
     "Ping uses ICMP Echo Request/Reply.",
     ["ICMP", "TCP", "UDP", "ARP"]),
    ("What layer does a router operate at?", "Layer 3",
     "Routers work at the Network layer (Layer 3).",
     ["Layer 1", "Layer 2", "Layer 3", "Layer 4"]),
    ("What layer does a switch operate at?", "Layer 2",
     "Switches work at the Data Link layer (Layer 2).",
     ["Layer 1", "Layer 2", "Layer 3", "Layer 4"]),
    ("What does DHCP provide?", "IP addresses",
     "DHCP automatically assigns IP addresses.",
     ["IP addresses", "MAC addresses", "Domain names", "Encryption"]),
    ("What port does HTTP use?", "80",
     "HTTP uses port 80 by default.",
     ["80", "443", "21", "25"]),
    ("What does DNS resolve?", "Domain to IP",
     "DNS translates domain names to IP addresses.",
     ["Domain to IP", "IP to MAC", "MAC to IP", "Port to IP"]),
]

# Options stay in this order when served, so every player sees the same screen.
DAILY_CHALLENGE_POOL: List[PoolEntry] = [
    ("A host has IP 10.1.1.200/26. What is its network address?", "10.1.1.192",
     "/26 blocks are 64 wide: 0, 64, 128, 192. 200 falls in the .192 block.",
     ["10.1.1.128", "10.1.1.192", "10.1.1.0", "10.1.1.200"]),
    ("Binary 11111111 equals which decimal value?", "255",
     "Eight 1-bits: 128+64+32+16+8+4+2+1 = 255.",
     ["127", "256", "255", "511"]),
    ("A laptop can reach 8.8.8.8 but not google.com. Which service is failing?", "DNS",
     "Reaching the IP proves routing works; name resolution is DNS.",
     ["DNS", "DHCP", "ARP", "NAT"]),
    ("What is hex 0xC0 in decimal?", "192",
     "C = 12, so 12 × 16 = 192.",
     ["172", "208", "160", "192"]),
    ("How many usable hosts does a /28 subnet provide?", "14",
     "/28 leaves 4 host bits: 2⁴ = 16 addresses - 2 = 14.",
     ["16", "14", "30", "12"]),
    ("Which subnet mask matches /20?", "255.255.240.0",
     "20 one-bits: 8 + 8 + 4, and 11110000 in the third octet is 240.",
     ["255.255.255.240", "255.255.224.0", "255.255.240.0", "255.240.0.0"]),
    ("A new PC shows IP 169.254.12.7. What most likely failed?", "DHCP",
     "169.254.x.x is an APIPA self-assigned address used when no DHCP server answers.",
     ["DHCP", "DNS", "ICMP", "HTTP"]),
    ("Octal 17 equals which decimal value?", "15",
     "1 × 8 + 7 = 15.",
     ["17", "15", "23", "13"]),
    ("What is the first octet of 172.16.5.4 in binary?", "10101100",
     "172 = 128 + 32 + 8 + 4 → 10101100.",
     ["10101100", "10110100", "11001010", "10101010"]),
    ("Which transport protocol does a DNS query usually use?", "UDP",
     "Standard DNS queries are small and go over UDP port 53.",
     ["TCP", "ICMP", "ARP", "UDP"]),
    ("Hex 3F expressed in binary is?", "111111",
     "3 → 0011 and F → 1111; trim leading zeros → 111111.",
     ["111111", "110011", "1111110", "101111"]),
    ("Two hosts share a switch but sit in different subnets. What do they need to talk?", "A router",
     "Traffic between subnets is forwarded at Layer 3.",
     ["A hub", "A router", "A longer cable", "A second switch"]),
]

CONCEPT_POOLS: Dict[QuizCategory, List[PoolEntry]] = {
    QuizCategory.IP_ADDRESSING: IP_ADDRESSING_POOL,
    QuizCategory.SUBNETTING: SUBNETTING_POOL,
    QuizCategory.PROTOCOLS: PROTOCOLS_POOL,
}
